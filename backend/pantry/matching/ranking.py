"""
Rank saved videos by how much of their recipe can be cooked from inventory.
"""
import logging
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from pantry.matching.matcher import InventoryLike, match_ingredients, calculate_match_percentage
from pantry.models.inventory import CookableRecipe
from pantry.models.recipe import ExtractedRecipe
from pantry.models.video import Video

logger = logging.getLogger(__name__)


class RankStatus(str, Enum):
    NEEDS_ANALYSIS = "needs_analysis"  # no extraction has been run yet
    NO_OVERLAP = "no_overlap"          # extracted, nothing on hand
    PARTIAL = "partial"
    READY = "ready"


def _status(recipe: Optional[ExtractedRecipe], percentage: int) -> RankStatus:
    if recipe is None:
        return RankStatus.NEEDS_ANALYSIS
    if percentage == 0:
        return RankStatus.NO_OVERLAP
    if percentage >= 100:
        return RankStatus.READY
    return RankStatus.PARTIAL


def build_cookable_recipe(
    video: Video,
    recipe: Optional[ExtractedRecipe],
    inventory: Sequence[InventoryLike],
) -> CookableRecipe:
    matched = match_ingredients(recipe.ingredients, inventory) if recipe else []
    percentage = calculate_match_percentage(matched)
    return CookableRecipe(
        video_id=video.id,
        title=video.title,
        recipe=recipe,
        matched_ingredients=matched,
        match_percentage=percentage,
        status=_status(recipe, percentage).value,
    )


def rank_cookable_recipes(
    entries: Sequence[Tuple[Video, Optional[ExtractedRecipe]]],
    inventory: Sequence[InventoryLike],
) -> List[CookableRecipe]:
    """
    Score every (video, recipe) pair and sort descending by match percentage.
    The sort is stable, so equal scores keep playlist order.
    """
    cookable = [build_cookable_recipe(video, recipe, inventory) for video, recipe in entries]
    cookable.sort(key=lambda c: c.match_percentage, reverse=True)
    logger.info(
        "RANK recipes=%d ready=%d needs_analysis=%d",
        len(cookable),
        sum(1 for c in cookable if c.status == RankStatus.READY.value),
        sum(1 for c in cookable if c.status == RankStatus.NEEDS_ANALYSIS.value),
    )
    return cookable
