"""
API tests for the FastAPI app (external services mocked, dependencies overridden).
Run from backend: python -m pytest tests/test_app.py -v
"""
import pytest
from unittest.mock import patch, MagicMock

from fastapi.testclient import TestClient


class FakeClient:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = 0

    def generate(self, prompt):
        self.calls += 1
        if self.error:
            raise self.error
        return self.reply


RECIPE_REPLY = '```json\n{"ingredients": ["卵 2個", "牛乳 50ml"], "steps": ["混ぜる", "焼く"], "servings": null, "cookingTime": "10分"}\n```'


@pytest.fixture
def api():
    """TestClient plus a helper to override dependencies; overrides are cleared afterwards."""
    import app as app_module
    overrides = app_module.app.dependency_overrides
    overrides[app_module.get_recipe_store] = lambda: MagicMock(get=MagicMock(return_value=None))
    overrides[app_module.get_inventory_store] = lambda: MagicMock()
    overrides[app_module.get_generative_client] = lambda: None
    yield app_module, TestClient(app_module.app)
    overrides.clear()


def _use(api, dependency, value):
    app_module, _ = api
    app_module.app.dependency_overrides[getattr(app_module, dependency)] = lambda: value


def test_health(api):
    """GET / returns ok."""
    _, client = api
    assert client.get("/").json()["status"] == "ok"


def test_gemini_extract_success(api):
    """Fenced reply is recovered; title/description are the caller's."""
    _, client = api
    fake = FakeClient(RECIPE_REPLY)
    _use(api, "get_generative_client", fake)
    res = client.get("/api/gemini/extract-recipe", params={"title": "オムレツ", "description": "ふわふわ"})
    assert res.status_code == 200
    recipe = res.json()["recipe"]
    assert recipe["title"] == "オムレツ"
    assert recipe["description"] == "ふわふわ"
    assert recipe["ingredients"] == ["卵 2個", "牛乳 50ml"]
    assert recipe["servings"] is None
    assert recipe["cookingTime"] == "10分"
    assert recipe["extractionMethod"] == "gemini_text_analysis"
    assert fake.calls == 1


def test_gemini_extract_requires_input_before_call(api):
    """400 without calling the model, even when no key is configured."""
    app_module, client = api
    res = client.get("/api/gemini/extract-recipe")
    assert res.status_code == 400
    assert res.json()["detail"] == app_module.MSG_TITLE_OR_DESCRIPTION_REQUIRED
    fake = FakeClient("{}")
    _use(api, "get_generative_client", fake)
    assert client.get("/api/gemini/extract-recipe").status_code == 400
    assert fake.calls == 0


def test_gemini_extract_without_key(api):
    """Missing credential is a 500 configuration error."""
    app_module, client = api
    res = client.get("/api/gemini/extract-recipe", params={"title": "オムレツ"})
    assert res.status_code == 500
    assert res.json()["detail"] == app_module.MSG_GEMINI_KEY_MISSING


def test_gemini_extract_nothing_found(api):
    """Empty ingredients and steps is 422, not an empty success."""
    _, client = api
    _use(api, "get_generative_client", FakeClient('{"ingredients": [], "steps": [], "servings": null, "cookingTime": null}'))
    res = client.get("/api/gemini/extract-recipe", params={"title": "雑談"})
    assert res.status_code == 422


def test_gemini_extract_parse_and_upstream_errors(api):
    """Invalid JSON and model failures are both 502."""
    from pantry.errors import UpstreamError
    _, client = api
    _use(api, "get_generative_client", FakeClient("すみません、わかりません"))
    assert client.get("/api/gemini/extract-recipe", params={"title": "t"}).status_code == 502
    _use(api, "get_generative_client", FakeClient(error=UpstreamError("quota")))
    assert client.get("/api/gemini/extract-recipe", params={"title": "t"}).status_code == 502


def test_youtube_search(api):
    """Search results serialize with camelCase keys; empty query is 400."""
    from pantry.models import YouTubeVideo
    _, client = api
    video = YouTubeVideo("abc123def45", "簡単カレー", "料理ch", "https://i.ytimg.com/a.jpg")
    with patch("app.search_videos", return_value=[video]) as mock_search:
        res = client.get("/api/youtube/search", params={"q": "カレー"})
        assert res.status_code == 200
        assert res.json()["videos"][0]["videoId"] == "abc123def45"
        mock_search.assert_called_once_with("カレー")
    with patch("app.search_videos", return_value=[]):
        body = client.get("/api/youtube/search", params={"q": "zzz"}).json()
        assert body["videos"] == []
        assert body["message"]
    assert client.get("/api/youtube/search").status_code == 400


def test_youtube_search_without_key(api):
    """Missing YouTube key is a 500 with its own message."""
    from pantry.errors import ConfigurationError
    app_module, client = api
    with patch("app.search_videos", side_effect=ConfigurationError("no key")):
        res = client.get("/api/youtube/search", params={"q": "カレー"})
    assert res.status_code == 500
    assert res.json()["detail"] == app_module.MSG_YOUTUBE_KEY_MISSING


def test_youtube_extract_cached(api):
    """A stored recipe is returned without contacting YouTube."""
    from pantry.models import ExtractedRecipe
    _, client = api
    store = MagicMock()
    store.get.return_value = ExtractedRecipe(title="親子丼", ingredients=("卵 3個",), video_id="v1")
    _use(api, "get_recipe_store", store)
    with patch("app.get_video_details") as mock_details:
        res = client.get("/api/youtube/extract-recipe", params={"videoId": "v1", "userId": "u1"})
        mock_details.assert_not_called()
    assert res.status_code == 200
    assert res.json()["recipe"]["extractionMethod"] == "database"
    store.get.assert_called_once_with("u1", "v1")


def test_youtube_extract_fresh_with_gemini_saves(api):
    """Cache miss: details are fetched, extracted, and saved for the user."""
    from pantry.models import VideoDetails
    _, client = api
    store = MagicMock()
    store.get.return_value = None
    _use(api, "get_recipe_store", store)
    _use(api, "get_generative_client", FakeClient(RECIPE_REPLY))
    details = VideoDetails("v1", "オムレツ", "ふわふわ", "料理ch")
    with patch("app.get_video_details", return_value=details):
        res = client.get("/api/youtube/extract-recipe", params={"videoId": "v1", "userId": "u1"})
    assert res.status_code == 200
    recipe = res.json()["recipe"]
    assert recipe["videoId"] == "v1"
    assert recipe["title"] == "オムレツ"
    store.save.assert_called_once()
    saved_user, saved_recipe, saved_video = store.save.call_args.args
    assert saved_user == "u1"
    assert saved_recipe.video_id == "v1"
    assert saved_video.url == "https://www.youtube.com/watch?v=v1"


def test_youtube_extract_description_fallback(api):
    """Without a Gemini key the description heuristic is used; no userId means no save."""
    from pantry.models import VideoDetails
    _, client = api
    store = MagicMock()
    _use(api, "get_recipe_store", store)
    details = VideoDetails("v1", "卵焼き", "材料\n・卵 3個\n作り方\n1. 卵を溶いて焼く", "ch")
    with patch("app.get_video_details", return_value=details):
        res = client.get("/api/youtube/extract-recipe", params={"videoId": "v1"})
    assert res.status_code == 200
    recipe = res.json()["recipe"]
    assert recipe["extractionMethod"] == "description"
    assert recipe["ingredients"] == ["卵 3個"]
    store.get.assert_not_called()
    store.save.assert_not_called()


def test_youtube_extract_errors(api):
    """Missing id is 400; unknown video is 404; nothing extracted is 422."""
    from pantry.models import VideoDetails
    _, client = api
    assert client.get("/api/youtube/extract-recipe").status_code == 400
    with patch("app.get_video_details", return_value=None):
        assert client.get("/api/youtube/extract-recipe", params={"videoId": "nope"}).status_code == 404
    with patch("app.get_video_details", return_value=VideoDetails("v1", "雑談", "", "ch")):
        assert client.get("/api/youtube/extract-recipe", params={"videoId": "v1"}).status_code == 422


def test_match_endpoint(api):
    """Milk on hand makes a one-line recipe 100% cookable."""
    _, client = api
    res = client.post(
        "/api/recipes/match",
        json={"ingredients": ["牛乳 200ml"], "inventory": [{"id": "m1", "name": "牛乳", "quantity": 3, "unit": "本"}]},
    )
    assert res.status_code == 200
    body = res.json()
    assert body["matchPercentage"] == 100
    m = body["matchedIngredients"][0]
    assert m["ingredientId"] == "m1"
    assert m["availableQuantity"] == 3
    assert m["unit"] == "本"


def test_match_endpoint_rejects_negative_quantity(api):
    """Inventory quantities must be non-negative."""
    _, client = api
    res = client.post(
        "/api/recipes/match",
        json={"ingredients": ["卵"], "inventory": [{"id": "e", "name": "卵", "quantity": -1}]},
    )
    assert res.status_code == 422


def test_rank_endpoint(api):
    """Recipes are ranked by match percentage; unanalysed videos are flagged."""
    _, client = api
    res = client.post(
        "/api/recipes/rank",
        json={
            "recipes": [
                {"videoId": "v1", "title": "未分析"},
                {"videoId": "v2", "title": "卵焼き", "recipe": {"title": "卵焼き", "ingredients": ["卵 3個"]}},
            ],
            "inventory": [{"id": "e", "name": "卵", "quantity": 6}],
        },
    )
    recipes = res.json()["recipes"]
    assert [r["videoId"] for r in recipes] == ["v2", "v1"]
    assert recipes[0]["status"] == "ready"
    assert recipes[1]["status"] == "needs_analysis"


def test_cookable_endpoint(api):
    """Stored recipes ranked against stored inventory."""
    from pantry.models import ExtractedRecipe, InventoryEntry
    _, client = api
    recipe_store = MagicMock()
    recipe_store.list.return_value = [ExtractedRecipe(title="卵焼き", ingredients=("卵 3個",), video_id="v2")]
    inventory_store = MagicMock()
    inventory_store.list.return_value = [InventoryEntry(id="e", name="卵", quantity=6)]
    _use(api, "get_recipe_store", recipe_store)
    _use(api, "get_inventory_store", inventory_store)
    res = client.get("/api/recipes/cookable", params={"userId": "u1"})
    assert res.status_code == 200
    assert res.json()["recipes"][0]["matchPercentage"] == 100
    inventory_store.list.assert_called_once_with("u1")


def test_deplete_endpoint_persists_for_user(api):
    """Depletion clamps at zero and writes each update when a user is given."""
    from pantry.models import InventoryEntry
    _, client = api
    store = MagicMock()
    store.list.return_value = [InventoryEntry(id="e", name="卵", quantity=2)]
    _use(api, "get_inventory_store", store)
    res = client.post(
        "/api/cooking/deplete",
        json={
            "usedIngredients": [{"ingredientId": "e", "quantityUsed": 3}],
            "userId": "u1",
        },
    )
    assert res.status_code == 200
    assert res.json()["updates"] == [{"ingredientId": "e", "quantity": 0.0}]
    store.list.assert_called_once_with("u1")
    store.update_quantity.assert_called_once_with("u1", "e", 0.0)


def test_deplete_endpoint_uses_stored_inventory_for_user(api):
    """With a user id the request inventory is ignored; only the user's own rows are touched."""
    from pantry.models import InventoryEntry
    _, client = api
    store = MagicMock()
    store.list.return_value = [InventoryEntry(id="mine", name="卵", quantity=4)]
    _use(api, "get_inventory_store", store)
    res = client.post(
        "/api/cooking/deplete",
        json={
            "inventory": [{"id": "other-users-row", "name": "牛乳", "quantity": 999}],
            "usedIngredients": [
                {"ingredientId": "other-users-row", "quantityUsed": 1},
                {"ingredientId": "mine", "quantityUsed": 1},
            ],
            "userId": "u1",
        },
    )
    assert res.status_code == 200
    assert res.json()["updates"] == [{"ingredientId": "mine", "quantity": 3.0}]
    store.update_quantity.assert_called_once_with("u1", "mine", 3.0)


def test_deplete_endpoint_without_user_uses_request(api):
    """Without a user id the request inventory is depleted and nothing is persisted."""
    _, client = api
    store = MagicMock()
    _use(api, "get_inventory_store", store)
    res = client.post(
        "/api/cooking/deplete",
        json={
            "inventory": [{"id": "e", "name": "卵", "quantity": 2, "unit": "個"}],
            "usedIngredients": [{"ingredientId": "e", "quantityUsed": 1}],
        },
    )
    assert res.status_code == 200
    assert res.json()["inventory"][0]["quantity"] == 1.0
    store.list.assert_not_called()
    store.update_quantity.assert_not_called()


def test_deplete_endpoint_partial_write_is_logged(api, caplog):
    """A failed write is a 502 and the log reports how many rows were already written."""
    import logging
    from pantry.errors import UpstreamError
    from pantry.models import InventoryEntry
    _, client = api
    store = MagicMock()
    store.list.return_value = [InventoryEntry(id="a", name="卵", quantity=2), InventoryEntry(id="b", name="牛乳", quantity=2)]
    store.update_quantity.side_effect = [None, UpstreamError("down")]
    _use(api, "get_inventory_store", store)
    with caplog.at_level(logging.ERROR):
        res = client.post(
            "/api/cooking/deplete",
            json={
                "usedIngredients": [
                    {"ingredientId": "a", "quantityUsed": 1},
                    {"ingredientId": "b", "quantityUsed": 1},
                ],
                "userId": "u1",
            },
        )
    assert res.status_code == 502
    assert "written=1 of 2" in caplog.text


def test_shopping_missing_endpoint(api):
    """Unavailable ingredients become shopping drafts."""
    _, client = api
    res = client.post(
        "/api/shopping/missing",
        json={"matchedIngredients": [
            {"extractedIngredient": "豚バラ肉 100g", "available": False},
            {"extractedIngredient": "卵 1個", "available": True},
        ]},
    )
    items = res.json()["items"]
    assert len(items) == 1
    assert items[0]["name"] == "豚バラ肉"
    assert items[0]["quantity"] == 100
    assert items[0]["unit"] == "g"


def test_allergens_endpoint(api):
    """Conflicting allergens and worst severity are reported."""
    _, client = api
    res = client.post(
        "/api/allergens/check",
        json={"ingredients": ["卵 2個", "醤油 大さじ1"], "allergies": [{"allergen": "卵", "severity": "severe"}]},
    )
    assert res.json() == {"hasAllergens": True, "conflictingAllergens": ["卵"], "maxSeverity": "severe"}
