"""
Small display and URL helpers for videos and inventory.
"""
import re
from datetime import date, datetime
from typing import Optional, Union

from pantry.constants import EXPIRY_WARNING_DAYS, YOUTUBE_URL_REGEX

_ISO_DURATION = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")


def extract_video_id(url: str) -> Optional[str]:
    """11-character video id from any common YouTube URL form, else None."""
    m = YOUTUBE_URL_REGEX.search(url or "")
    return m.group(1) if m else None


def format_duration(duration: Optional[str]) -> str:
    """ISO 8601 'PT1H2M3S' -> '1:02:03', 'PT4M5S' -> '4:05'."""
    if not duration:
        return "不明"
    m = _ISO_DURATION.search(duration)
    if not m:
        return duration
    hours, minutes, seconds = (int(g or 0) for g in m.groups())
    if hours > 0:
        return f"{hours}:{minutes:02d}:{seconds:02d}"
    return f"{minutes}:{seconds:02d}"


def format_view_count(count: Optional[int]) -> str:
    if not count:
        return "0回"
    if count >= 1_000_000:
        return f"{count / 1_000_000:.1f}M回"
    if count >= 1_000:
        return f"{count / 1_000:.1f}K回"
    return f"{count}回"


def get_expiry_status(expiry_date: Optional[Union[str, date]], today: Optional[date] = None) -> str:
    """'expired', 'expiring' (within EXPIRY_WARNING_DAYS) or 'fresh'. Unparseable dates count as fresh."""
    if not expiry_date:
        return "fresh"
    if isinstance(expiry_date, str):
        try:
            expiry = datetime.fromisoformat(expiry_date[:10]).date()
        except ValueError:
            return "fresh"
    elif isinstance(expiry_date, datetime):
        expiry = expiry_date.date()
    else:
        expiry = expiry_date
    diff_days = (expiry - (today or date.today())).days
    if diff_days < 0:
        return "expired"
    if diff_days <= EXPIRY_WARNING_DAYS:
        return "expiring"
    return "fresh"
