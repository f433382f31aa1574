"""
Generative text service client (Gemini via the google-genai SDK).

Constructed explicitly with its credential; there is no module-level client.
One call per generate(), no retries, no streaming.
"""
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from pantry.config import get_gemini_api_key, get_gemini_model, LLM_EXTRACT_TIMEOUT
from pantry.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class GenerativeTextClient:
    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: Optional[int] = LLM_EXTRACT_TIMEOUT,
        sdk_client: Optional[Any] = None,
    ):
        if not (api_key or "").strip():
            raise ConfigurationError("GEMINI_API_KEY is not set")
        self.model = model or get_gemini_model()
        if sdk_client is None:
            # HttpOptions.timeout is in milliseconds
            http_options = types.HttpOptions(timeout=timeout * 1000) if timeout else None
            sdk_client = genai.Client(api_key=api_key.strip(), http_options=http_options)
        self._client = sdk_client

    @classmethod
    def from_env(cls) -> "GenerativeTextClient":
        """Build from GEMINI_API_KEY / GEMINI_MODEL. Raises ConfigurationError when the key is missing."""
        return cls(api_key=get_gemini_api_key(), model=get_gemini_model())

    def generate(self, prompt: str) -> str:
        """Send one prompt and return the reply text. Raises UpstreamError."""
        try:
            response = self._client.models.generate_content(model=self.model, contents=prompt)
            text = response.text
        except Exception as e:
            logger.error("GEMINI call failed model=%s error=%s", self.model, e)
            raise UpstreamError(f"Generative model call failed: {e}") from e
        if not text or not text.strip():
            logger.error("GEMINI empty response model=%s", self.model)
            raise UpstreamError("Generative model returned no text")
        logger.info("GEMINI ok model=%s chars=%d", self.model, len(text))
        return text
