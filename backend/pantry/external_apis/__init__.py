"""
External API connectors. YouTube Data API v3 over requests.
"""
from .http_retry import get_with_retries
from .youtube import search_videos, get_video_details

__all__ = [
    "get_with_retries",
    "search_videos",
    "get_video_details",
]
