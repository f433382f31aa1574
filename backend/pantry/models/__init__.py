from .recipe import ExtractedRecipe
from .inventory import (
    InventoryEntry,
    ParsedIngredientLine,
    MatchedIngredient,
    CookableRecipe,
    UsedIngredient,
    ShoppingItemDraft,
)
from .allergy import Severity, UserAllergy, AllergyCheck
from .video import Video, VideoDetails, YouTubeVideo

__all__ = [
    "ExtractedRecipe",
    "InventoryEntry",
    "ParsedIngredientLine",
    "MatchedIngredient",
    "CookableRecipe",
    "UsedIngredient",
    "ShoppingItemDraft",
    "Severity",
    "UserAllergy",
    "AllergyCheck",
    "Video",
    "VideoDetails",
    "YouTubeVideo",
]
