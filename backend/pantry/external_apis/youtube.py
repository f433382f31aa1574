"""
YouTube Data API v3 connector.
Search:  GET https://www.googleapis.com/youtube/v3/search?part=snippet&q=...&type=video
Details: GET https://www.googleapis.com/youtube/v3/videos?part=snippet,contentDetails,statistics&id=...
"""
import logging
from typing import List, Optional

from pantry.config import get_youtube_api_key, get_youtube_max_results, YOUTUBE_TIMEOUT
from pantry.errors import ConfigurationError, UpstreamError, ValidationError
from pantry.external_apis.http_retry import get_with_retries
from pantry.models.video import VideoDetails, YouTubeVideo

logger = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
YOUTUBE_VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"

# Appended to every search so results lean towards cooking videos
SEARCH_SUFFIX = " レシピ 料理"


def _require_key(api_key: Optional[str]) -> str:
    key = (api_key or get_youtube_api_key()).strip()
    if not key:
        raise ConfigurationError("YOUTUBE_API_KEY is not set")
    return key


def _get_json(url: str, params: dict, timeout: int) -> dict:
    resp, err = get_with_retries(url, params=params, timeout=timeout)
    if resp is None:
        raise UpstreamError(f"YouTube API unreachable: {err}")
    if resp.status_code != 200:
        logger.error("YOUTUBE_API status=%s body=%s", resp.status_code, resp.text[:200])
        raise UpstreamError(f"YouTube API returned HTTP {resp.status_code}")
    return resp.json()


def _thumbnail(snippet: dict) -> str:
    return ((snippet.get("thumbnails") or {}).get("medium") or {}).get("url", "")


def _view_count(statistics: dict) -> Optional[int]:
    raw = statistics.get("viewCount")
    try:
        return int(raw) if raw else None
    except (TypeError, ValueError):
        return None


def search_videos(
    query: str,
    api_key: Optional[str] = None,
    max_results: Optional[int] = None,
    timeout: int = YOUTUBE_TIMEOUT,
) -> List[YouTubeVideo]:
    """Search cooking videos and merge in duration / view count from a details call."""
    if not query or not query.strip():
        raise ValidationError("search query is required")
    key = _require_key(api_key)

    data = _get_json(
        YOUTUBE_SEARCH_URL,
        {
            "part": "snippet",
            "q": query + SEARCH_SUFFIX,
            "type": "video",
            "maxResults": max_results or get_youtube_max_results(),
            "key": key,
        },
        timeout,
    )
    items = [i for i in data.get("items") or [] if (i.get("id") or {}).get("videoId")]
    if not items:
        logger.info("YOUTUBE_SEARCH query=%s results=0", query[:60])
        return []

    ids = [i["id"]["videoId"] for i in items]
    details_by_id: dict = {}
    try:
        details = _get_json(
            YOUTUBE_VIDEOS_URL,
            {"part": "contentDetails,statistics,snippet", "id": ",".join(ids), "key": key},
            timeout,
        )
        details_by_id = {d.get("id"): d for d in details.get("items") or []}
    except UpstreamError as e:
        # Search results are still usable without duration / view count
        logger.warning("YOUTUBE_DETAILS failed, using search snippets: %s", e)

    videos: List[YouTubeVideo] = []
    for item in items:
        video_id = item["id"]["videoId"]
        detail = details_by_id.get(video_id) or {}
        snippet = detail.get("snippet") or item.get("snippet") or {}
        videos.append(
            YouTubeVideo(
                video_id=video_id,
                title=snippet.get("title", ""),
                channel_name=snippet.get("channelTitle", ""),
                thumbnail_url=_thumbnail(snippet),
                description=snippet.get("description", ""),
                duration=(detail.get("contentDetails") or {}).get("duration"),
                view_count=_view_count(detail.get("statistics") or {}),
                published_at=snippet.get("publishedAt"),
            )
        )
    logger.info("YOUTUBE_SEARCH query=%s results=%d", query[:60], len(videos))
    return videos


def get_video_details(
    video_id: str,
    api_key: Optional[str] = None,
    timeout: int = YOUTUBE_TIMEOUT,
) -> Optional[VideoDetails]:
    """Title, description and channel for one video; None if the id is unknown."""
    if not video_id:
        raise ValidationError("video id is required")
    key = _require_key(api_key)
    data = _get_json(YOUTUBE_VIDEOS_URL, {"part": "snippet", "id": video_id, "key": key}, timeout)
    items = data.get("items") or []
    if not items:
        logger.info("YOUTUBE_DETAILS video_id=%s not found", video_id)
        return None
    snippet = items[0].get("snippet") or {}
    return VideoDetails(
        video_id=video_id,
        title=snippet.get("title", ""),
        description=snippet.get("description", ""),
        channel_title=snippet.get("channelTitle", ""),
        thumbnail=_thumbnail(snippet),
    )
