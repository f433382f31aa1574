"""
Pantry chef FastAPI application.

Endpoints:
    GET  /                              Health check
    GET  /api/gemini/extract-recipe     title/description/channel -> recipe (Gemini)
    GET  /api/youtube/search            Cooking video search
    GET  /api/youtube/extract-recipe    videoId -> cached or freshly extracted recipe
    POST /api/recipes/match             Extracted ingredients vs inventory -> match %
    POST /api/recipes/rank              Saved videos ranked by cookability
    GET  /api/recipes/cookable          Stored recipes ranked against stored inventory
    POST /api/cooking/deplete           Subtract used ingredients from inventory
    POST /api/shopping/missing          Shopping list drafts for unavailable ingredients
    POST /api/allergens/check           Recipe ingredients vs user allergies
"""
from dataclasses import replace
from functools import lru_cache
from typing import List, Dict, Optional
import logging

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from dotenv import load_dotenv
from pathlib import Path

# Load env vars before pantry.config reads timeouts
load_dotenv(Path(__file__).parent / ".env")

# Initialize App
app = FastAPI(title="Pantry Chef API")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Logger
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from pantry.config import log_config
from pantry.errors import (
    ValidationError,
    ConfigurationError,
    UpstreamError,
    NotFoundError,
    ExtractionParseError,
)
from pantry.extraction import (
    GenerativeTextClient,
    RecipeExtractor,
    validate_extraction_input,
    extract_recipe_from_description,
)
from pantry.external_apis import search_videos, get_video_details
from pantry.matching import match_ingredients, calculate_match_percentage, rank_cookable_recipes
from pantry.models import ExtractedRecipe, InventoryEntry, MatchedIngredient, UsedIngredient, UserAllergy, Video
from pantry.cooking import deplete_inventory, missing_to_shopping_items
from pantry.allergens import check_user_allergens
from pantry.storage import RecipeStore, InventoryStore, get_supabase_client

log_config()

# User-facing messages
MSG_TITLE_OR_DESCRIPTION_REQUIRED = "動画タイトルまたは説明文が必要です"
MSG_VIDEO_ID_REQUIRED = "動画IDが必要です"
MSG_QUERY_REQUIRED = "検索クエリが必要です"
MSG_GEMINI_KEY_MISSING = "Gemini API キーが設定されていません"
MSG_YOUTUBE_KEY_MISSING = "YouTube API キーが設定されていません"
MSG_VIDEO_NOT_FOUND = "動画が見つかりませんでした"
MSG_NOTHING_EXTRACTED = "説明文からレシピ情報（材料と手順）を抽出できませんでした。"
MSG_NO_SEARCH_RESULTS = "検索結果が見つかりませんでした"
MSG_UPSTREAM = "外部サービスとの通信に失敗しました"
MSG_PARSE = "AIの応答を解析できませんでした"
MSG_SERVER_ERROR = "サーバーエラーが発生しました"


# --- Dependencies ---

@lru_cache(maxsize=1)
def _supabase_client():
    return get_supabase_client()


def get_recipe_store() -> RecipeStore:
    return RecipeStore(_supabase_client())


def get_inventory_store() -> InventoryStore:
    return InventoryStore(_supabase_client())


def get_generative_client() -> Optional[GenerativeTextClient]:
    """None when GEMINI_API_KEY is missing; routes decide whether that is an error."""
    try:
        return GenerativeTextClient.from_env()
    except ConfigurationError:
        return None


# --- Request/Response Models ---

class InventoryItem(BaseModel):
    id: str
    name: str
    quantity: float = Field(default=0, ge=0)
    unit: str = ""
    category: Optional[str] = None
    expiry_date: Optional[str] = None
    location: Optional[str] = None

    def to_entry(self) -> InventoryEntry:
        return InventoryEntry.from_dict(self.model_dump())


class MatchRequest(BaseModel):
    ingredients: List[str]
    inventory: List[InventoryItem] = []


class SavedRecipe(BaseModel):
    videoId: str
    title: str = ""
    url: str = ""
    thumbnail: str = ""
    recipe: Optional[Dict] = None


class RankRequest(BaseModel):
    recipes: List[SavedRecipe]
    inventory: List[InventoryItem] = []


class UsedIngredientBody(BaseModel):
    ingredientId: str
    quantityUsed: float = Field(ge=0)
    ingredientName: str = ""
    unit: str = ""


class DepleteRequest(BaseModel):
    inventory: List[InventoryItem] = []
    usedIngredients: List[UsedIngredientBody]
    userId: Optional[str] = None


class MissingRequest(BaseModel):
    matchedIngredients: List[Dict]


class AllergyBody(BaseModel):
    allergen: str
    severity: str = "mild"
    notes: Optional[str] = None


class AllergyCheckRequest(BaseModel):
    ingredients: List[str]
    allergies: List[AllergyBody] = []


# --- Helper Functions ---

def _http_error(e: Exception, context: str, config_message: str = MSG_SERVER_ERROR) -> HTTPException:
    """Map the error taxonomy onto status codes and user-facing messages."""
    if isinstance(e, ValidationError):
        return HTTPException(status_code=400, detail=str(e))
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=MSG_VIDEO_NOT_FOUND)
    if isinstance(e, ConfigurationError):
        logger.error("%s configuration error: %s", context, e)
        return HTTPException(status_code=500, detail=config_message)
    if isinstance(e, ExtractionParseError):
        logger.error("%s parse error: %s", context, e)
        return HTTPException(status_code=502, detail=MSG_PARSE)
    if isinstance(e, UpstreamError):
        logger.error("%s upstream error: %s", context, e)
        return HTTPException(status_code=502, detail=MSG_UPSTREAM)
    logger.error("%s failed: %s", context, e, exc_info=True)
    return HTTPException(status_code=500, detail=MSG_SERVER_ERROR)


def _nothing_extracted() -> HTTPException:
    return HTTPException(status_code=422, detail=MSG_NOTHING_EXTRACTED)


def _watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


# --- Endpoints ---

@app.get("/")
def health_check():
    return {"status": "ok", "service": "Pantry Chef"}


@app.get("/api/gemini/extract-recipe")
def gemini_extract_recipe(
    title: str = "",
    description: str = "",
    channelTitle: str = "",
    client: Optional[GenerativeTextClient] = Depends(get_generative_client),
):
    """Extract a recipe from video text with the generative model."""
    logger.info("Gemini extract title=%s", title[:60])
    try:
        validate_extraction_input(title, description)
    except ValidationError:
        raise HTTPException(status_code=400, detail=MSG_TITLE_OR_DESCRIPTION_REQUIRED)
    try:
        if client is None:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        recipe = RecipeExtractor(client).extract(title, description, channelTitle)
    except Exception as e:
        raise _http_error(e, "Gemini extract", MSG_GEMINI_KEY_MISSING)

    if recipe.is_empty():
        logger.info("Gemini extract found nothing title=%s", title[:60])
        raise _nothing_extracted()
    return {"recipe": recipe.to_dict()}


@app.get("/api/youtube/search")
def youtube_search(q: str = ""):
    if not q:
        raise HTTPException(status_code=400, detail=MSG_QUERY_REQUIRED)
    try:
        videos = search_videos(q)
    except Exception as e:
        raise _http_error(e, "YouTube search", MSG_YOUTUBE_KEY_MISSING)
    if not videos:
        return {"videos": [], "message": MSG_NO_SEARCH_RESULTS}
    return {"videos": [v.to_dict() for v in videos]}


@app.get("/api/youtube/extract-recipe")
def youtube_extract_recipe(
    videoId: str = "",
    userId: Optional[str] = None,
    store: RecipeStore = Depends(get_recipe_store),
    client: Optional[GenerativeTextClient] = Depends(get_generative_client),
):
    """
    Cached recipe for (userId, videoId) when present; otherwise fetch video
    details, extract (Gemini, or the description heuristic without a key)
    and save the result for the user.
    """
    if not videoId:
        raise HTTPException(status_code=400, detail=MSG_VIDEO_ID_REQUIRED)

    cached = store.get(userId, videoId) if userId else None
    if cached is not None:
        return {"recipe": replace(cached, extraction_method="database").to_dict()}

    try:
        details = get_video_details(videoId)
        if details is None:
            raise NotFoundError(videoId)
        if client is not None:
            recipe = RecipeExtractor(client).extract(
                details.title, details.description, details.channel_title, video_id=videoId,
            )
        else:
            logger.info("YouTube extract without Gemini key, using description video_id=%s", videoId)
            recipe = replace(
                extract_recipe_from_description(details.title, details.description),
                video_id=videoId,
            )
    except Exception as e:
        raise _http_error(e, "YouTube extract", MSG_YOUTUBE_KEY_MISSING)

    if recipe.is_empty():
        raise _nothing_extracted()

    if userId:
        store.save(
            userId,
            recipe,
            Video(id=videoId, title=details.title, url=_watch_url(videoId), thumbnail=details.thumbnail),
        )
    return {"recipe": recipe.to_dict()}


@app.post("/api/recipes/match")
def match_recipe(request: MatchRequest):
    inventory = [item.to_entry() for item in request.inventory]
    matched = match_ingredients(request.ingredients, inventory)
    return {
        "matchedIngredients": [m.to_dict() for m in matched],
        "matchPercentage": calculate_match_percentage(matched),
    }


@app.post("/api/recipes/rank")
def rank_recipes(request: RankRequest):
    inventory = [item.to_entry() for item in request.inventory]
    entries = [
        (
            Video(id=r.videoId, title=r.title, url=r.url, thumbnail=r.thumbnail),
            ExtractedRecipe.from_dict(r.recipe) if r.recipe is not None else None,
        )
        for r in request.recipes
    ]
    return {"recipes": [c.to_dict() for c in rank_cookable_recipes(entries, inventory)]}


@app.get("/api/recipes/cookable")
def cookable_recipes(
    userId: str = Query(...),
    recipe_store: RecipeStore = Depends(get_recipe_store),
    inventory_store: InventoryStore = Depends(get_inventory_store),
):
    """The user's stored recipes ranked against their stored inventory."""
    try:
        inventory = inventory_store.list(userId)
    except Exception as e:
        raise _http_error(e, "Cookable recipes")
    recipes = recipe_store.list(userId)
    entries = [(Video(id=r.video_id or "", title=r.title), r) for r in recipes]
    return {"recipes": [c.to_dict() for c in rank_cookable_recipes(entries, inventory)]}


@app.post("/api/cooking/deplete")
def deplete(
    request: DepleteRequest,
    store: InventoryStore = Depends(get_inventory_store),
):
    """
    With userId, quantities come from the user's stored inventory and the
    new values are written back; otherwise the request inventory is used.
    """
    used = [UsedIngredient.from_dict(u.model_dump()) for u in request.usedIngredients]
    if request.userId:
        try:
            inventory = store.list(request.userId)
        except Exception as e:
            raise _http_error(e, "Cooking deplete")
    else:
        inventory = [item.to_entry() for item in request.inventory]

    new_inventory, updates = deplete_inventory(inventory, used)
    if request.userId:
        written = 0
        try:
            for ingredient_id, quantity in updates:
                store.update_quantity(request.userId, ingredient_id, quantity)
                written += 1
        except Exception as e:
            logger.error(
                "Cooking deplete stopped user_id=%s written=%d of %d",
                request.userId, written, len(updates),
            )
            raise _http_error(e, "Cooking deplete")
    return {
        "inventory": [e.to_dict() for e in new_inventory],
        "updates": [{"ingredientId": i, "quantity": q} for i, q in updates],
    }


@app.post("/api/shopping/missing")
def shopping_missing(request: MissingRequest):
    matched = [MatchedIngredient.from_dict(m) for m in request.matchedIngredients]
    return {"items": [item.to_dict() for item in missing_to_shopping_items(matched)]}


@app.post("/api/allergens/check")
def allergens_check(request: AllergyCheckRequest):
    allergies = [UserAllergy.from_dict(a.model_dump()) for a in request.allergies]
    return check_user_allergens(request.ingredients, allergies).to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app:app", host="0.0.0.0", port=8000, reload=True)
