"""
Recipe extraction adapter: video title/description/channel -> ExtractedRecipe.

The model is trusted for structure only. title and description in the result
are always the caller's inputs. Upstream and parse errors propagate so the
caller can tell "misconfigured" from "model failed" from "nothing found".
"""
import logging
from typing import Any, Dict, List, Optional

from pantry.errors import ValidationError
from pantry.extraction.client import GenerativeTextClient
from pantry.extraction.prompt import build_extraction_prompt
from pantry.extraction.recovery import recover_candidate_text, parse_recipe_json
from pantry.models.recipe import ExtractedRecipe

logger = logging.getLogger(__name__)


def validate_extraction_input(title: Optional[str], description: Optional[str]) -> None:
    if not title and not description:
        raise ValidationError("title or description is required")


def _string_list(value: Any, field_name: str) -> List[str]:
    if not value:
        return []
    if not isinstance(value, list):
        logger.warning("EXTRACT field=%s is %s, expected list; using []", field_name, type(value).__name__)
        return []
    return [str(v) for v in value if v is not None]


def _optional_text(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def recipe_from_model_data(
    data: Dict[str, Any],
    title: str,
    description: str,
    video_id: Optional[str] = None,
) -> ExtractedRecipe:
    """Normalize a parsed model object into an ExtractedRecipe."""
    return ExtractedRecipe(
        title=title,
        ingredients=tuple(_string_list(data.get("ingredients"), "ingredients")),
        steps=tuple(_string_list(data.get("steps"), "steps")),
        servings=_optional_text(data.get("servings")),
        cooking_time=_optional_text(data.get("cookingTime")),
        description=description,
        extraction_method="gemini_text_analysis",
        video_id=video_id,
    )


class RecipeExtractor:
    def __init__(self, client: GenerativeTextClient):
        self.client = client

    def extract(
        self,
        title: str,
        description: str,
        channel_title: str = "",
        video_id: Optional[str] = None,
    ) -> ExtractedRecipe:
        """
        One model call, then fence/brace recovery and a strict JSON parse.
        Raises ValidationError, UpstreamError or ExtractionParseError.
        """
        title = title or ""
        description = description or ""
        validate_extraction_input(title, description)

        prompt = build_extraction_prompt(title, description, channel_title or "")
        raw = self.client.generate(prompt)
        candidate = recover_candidate_text(raw)
        data = parse_recipe_json(candidate)

        recipe = recipe_from_model_data(data, title, description, video_id=video_id)
        logger.info(
            "EXTRACT ok title=%s ingredients=%d steps=%d",
            title[:60], len(recipe.ingredients), len(recipe.steps),
        )
        return recipe


def extract_recipe(
    title: str,
    description: str,
    channel_title: str = "",
    client: Optional[GenerativeTextClient] = None,
) -> ExtractedRecipe:
    """Validate first, then build a client from the environment if none is passed."""
    validate_extraction_input(title, description)
    if client is None:
        client = GenerativeTextClient.from_env()
    return RecipeExtractor(client).extract(title, description, channel_title)
