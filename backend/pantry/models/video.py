"""
Video records: saved playlist entries and YouTube Data API results.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Video:
    """A video saved into a user's playlist."""
    id: str
    title: str
    url: str = ""
    thumbnail: str = ""
    duration: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Video":
        return cls(
            id=str(data.get("id") or data.get("videoId") or ""),
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            thumbnail=str(data.get("thumbnail") or ""),
            duration=data.get("duration"),
        )


@dataclass
class VideoDetails:
    """Metadata fed to the extraction adapter."""
    video_id: str
    title: str
    description: str
    channel_title: str
    thumbnail: str = ""


@dataclass
class YouTubeVideo:
    video_id: str
    title: str
    channel_name: str
    thumbnail_url: str
    description: str = ""
    duration: Optional[str] = None
    view_count: Optional[int] = None
    published_at: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "channelName": self.channel_name,
            "thumbnailUrl": self.thumbnail_url,
            "description": self.description,
            "duration": self.duration,
            "viewCount": self.view_count,
            "publishedAt": self.published_at,
        }
