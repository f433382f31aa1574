#!/usr/bin/env python3
"""
Check if external APIs (YouTube Data API, Gemini) are configured and reachable.
Run from backend: python scripts/check_external_apis.py
Exit 0 if both APIs work; 1 if either fails or is not configured.
"""
import sys
from pathlib import Path
from typing import Tuple

# Add backend to path when run as script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv
load_dotenv(Path(__file__).resolve().parent.parent / ".env")

# Short timeout for health check
HEALTH_TIMEOUT = 8


def check_youtube(api_key: str) -> Tuple[bool, str]:
    """Return (success, message)."""
    if not (api_key or "").strip():
        return False, "no API key (set YOUTUBE_API_KEY)"
    from pantry.errors import PantryError
    from pantry.external_apis.youtube import search_videos
    try:
        videos = search_videos("カレー", api_key=api_key.strip(), max_results=1, timeout=HEALTH_TIMEOUT)
    except PantryError as e:
        return False, str(e)
    return True, f"ok (results={len(videos)})"


def check_gemini(api_key: str) -> Tuple[bool, str]:
    """Return (success, message)."""
    if not (api_key or "").strip():
        return False, "no API key (set GEMINI_API_KEY)"
    from pantry.errors import PantryError
    from pantry.extraction.client import GenerativeTextClient
    try:
        client = GenerativeTextClient(api_key=api_key, timeout=HEALTH_TIMEOUT)
        client.generate('Reply with {"ok": true}')
    except PantryError as e:
        return False, str(e)
    return True, f"ok (model={client.model})"


def main() -> int:
    from pantry.config import get_youtube_api_key, get_gemini_api_key
    print("Checking external APIs...")
    youtube_ok, youtube_msg = check_youtube(get_youtube_api_key())
    print(f"  YouTube Data API: {'OK' if youtube_ok else 'FAIL'} - {youtube_msg}")
    gemini_ok, gemini_msg = check_gemini(get_gemini_api_key())
    print(f"  Gemini:           {'OK' if gemini_ok else 'FAIL'} - {gemini_msg}")
    if youtube_ok and gemini_ok:
        print("All APIs are working.")
        return 0
    print("At least one API failed or is not configured.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
