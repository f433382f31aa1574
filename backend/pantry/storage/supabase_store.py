"""
Supabase-backed stores for extracted recipes and inventory.

Each store wraps an injected client. With no client (Supabase not configured)
the recipe store behaves as an always-empty cache, so extraction still works.
Rows are owned per user; every query filters on user_id.
"""
import logging
from typing import Any, List, Optional

from supabase import create_client, Client

from pantry.config import get_supabase_url, get_supabase_key
from pantry.errors import UpstreamError
from pantry.models.inventory import InventoryEntry
from pantry.models.recipe import ExtractedRecipe
from pantry.models.video import Video

logger = logging.getLogger(__name__)

EXTRACTED_RECIPES_TABLE = "extracted_recipes"
INGREDIENTS_TABLE = "ingredients"


def get_supabase_client() -> Optional[Client]:
    """Client from SUPABASE_URL / key env vars, or None when not configured."""
    url = get_supabase_url()
    key = get_supabase_key()
    if not url or not key:
        logger.info("SUPABASE not configured; stores run without persistence")
        return None
    return create_client(url, key)


def recipe_to_row(user_id: str, recipe: ExtractedRecipe, video: Optional[Video] = None) -> dict:
    row = {
        "user_id": user_id,
        "video_id": recipe.video_id or (video.id if video else ""),
        "title": recipe.title,
        "ingredients": list(recipe.ingredients),
        "steps": list(recipe.steps),
        "servings": recipe.servings,
        "cooking_time": recipe.cooking_time,
        "description": recipe.description,
        "extraction_method": recipe.extraction_method,
    }
    if video is not None:
        row.update({
            "video_url": video.url,
            "video_title": video.title,
            "video_thumbnail": video.thumbnail,
        })
    return row


class RecipeStore:
    """Extracted recipes keyed by (user_id, video_id)."""

    def __init__(self, client: Optional[Any] = None):
        self.client = client

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def get(self, user_id: str, video_id: str) -> Optional[ExtractedRecipe]:
        """Cached recipe or None. Store errors count as a cache miss."""
        if not self.enabled or not user_id:
            return None
        try:
            res = (
                self.client.table(EXTRACTED_RECIPES_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .eq("video_id", video_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            logger.warning("RECIPE_STORE get failed user_id=%s video_id=%s error=%s", user_id, video_id, e)
            return None
        rows = res.data or []
        if not rows:
            return None
        logger.info("RECIPE_STORE hit user_id=%s video_id=%s", user_id, video_id)
        return ExtractedRecipe.from_dict({**rows[0], "video_id": video_id})

    def save(self, user_id: str, recipe: ExtractedRecipe, video: Optional[Video] = None) -> bool:
        """Upsert; failures are logged and skipped."""
        if not self.enabled or not user_id:
            return False
        row = recipe_to_row(user_id, recipe, video)
        try:
            self.client.table(EXTRACTED_RECIPES_TABLE).upsert(row, on_conflict="user_id,video_id").execute()
        except Exception as e:
            logger.warning("RECIPE_STORE save skipped user_id=%s video_id=%s error=%s", user_id, row["video_id"], e)
            return False
        logger.info("RECIPE_STORE save user_id=%s video_id=%s", user_id, row["video_id"])
        return True

    def list(self, user_id: str) -> List[ExtractedRecipe]:
        """All of a user's recipes, newest first."""
        if not self.enabled or not user_id:
            return []
        try:
            res = (
                self.client.table(EXTRACTED_RECIPES_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.warning("RECIPE_STORE list failed user_id=%s error=%s", user_id, e)
            return []
        return [ExtractedRecipe.from_dict(row) for row in res.data or []]

    def delete(self, user_id: str, video_id: str) -> bool:
        if not self.enabled or not user_id:
            return False
        try:
            self.client.table(EXTRACTED_RECIPES_TABLE).delete().eq("user_id", user_id).eq("video_id", video_id).execute()
        except Exception as e:
            logger.error("RECIPE_STORE delete failed user_id=%s video_id=%s error=%s", user_id, video_id, e)
            return False
        return True


class InventoryStore:
    """The user's ingredients table. Reads feed the matcher; writes come from cooking."""

    def __init__(self, client: Optional[Any] = None):
        self.client = client

    def list(self, user_id: str) -> List[InventoryEntry]:
        if self.client is None or not user_id:
            return []
        try:
            res = (
                self.client.table(INGREDIENTS_TABLE)
                .select("*")
                .eq("user_id", user_id)
                .order("created_at", desc=True)
                .execute()
            )
        except Exception as e:
            logger.error("INVENTORY_STORE list failed user_id=%s error=%s", user_id, e)
            raise UpstreamError(f"Failed to load inventory: {e}") from e
        return [InventoryEntry.from_dict(row) for row in res.data or []]

    def update_quantity(self, user_id: str, ingredient_id: str, quantity: float) -> None:
        if self.client is None or not user_id:
            return
        try:
            (
                self.client.table(INGREDIENTS_TABLE)
                .update({"quantity": quantity})
                .eq("user_id", user_id)
                .eq("id", ingredient_id)
                .execute()
            )
        except Exception as e:
            logger.error("INVENTORY_STORE update failed user_id=%s id=%s error=%s", user_id, ingredient_id, e)
            raise UpstreamError(f"Failed to update inventory: {e}") from e
        logger.info("INVENTORY_STORE update user_id=%s id=%s quantity=%s", user_id, ingredient_id, quantity)
