"""
Centralized configuration. Credentials are read lazily from the environment
so that tests and scripts can patch them per call.
"""
import os
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# backend/pantry/config.py -> parent=pantry, parent.parent=backend
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_REPO_ROOT = _BACKEND_DIR.parent


# --- Generative text service (Gemini) ---
def get_gemini_api_key() -> str:
    return os.environ.get("GEMINI_API_KEY", "").strip()

def get_gemini_model() -> str:
    return os.environ.get("GEMINI_MODEL", "gemini-1.5-flash-latest")


# --- YouTube Data API ---
def get_youtube_api_key() -> str:
    return os.environ.get("YOUTUBE_API_KEY", "").strip()

def get_youtube_max_results() -> int:
    return int(os.environ.get("YOUTUBE_MAX_RESULTS", "12"))


# --- Supabase ---
def get_supabase_url() -> str:
    return (os.environ.get("SUPABASE_URL") or os.environ.get("NEXT_PUBLIC_SUPABASE_URL") or "").strip()

def get_supabase_key() -> str:
    return (
        os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
        or os.environ.get("NEXT_PUBLIC_SUPABASE_ANON_KEY")
        or ""
    ).strip()


# Timeout defaults (seconds)
LLM_EXTRACT_TIMEOUT = int(os.environ.get("LLM_EXTRACT_TIMEOUT", "60"))
YOUTUBE_TIMEOUT = int(os.environ.get("YOUTUBE_TIMEOUT", "10"))


# --- Startup logging ---
def log_config() -> None:
    logger.info(
        "CONFIG: gemini_key=%s gemini_model=%s youtube_key=%s supabase=%s "
        "llm_extract_timeout=%ds youtube_timeout=%ds youtube_max_results=%d",
        bool(get_gemini_api_key()), get_gemini_model(),
        bool(get_youtube_api_key()),
        bool(get_supabase_url() and get_supabase_key()),
        LLM_EXTRACT_TIMEOUT, YOUTUBE_TIMEOUT, get_youtube_max_results(),
    )
