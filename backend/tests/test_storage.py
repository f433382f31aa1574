"""
Unit tests for the Supabase-backed stores (client mocked).
Run from backend: python -m pytest tests/test_storage.py -v
"""
import pytest
from unittest.mock import patch, MagicMock


def _client(rows=None, error=None):
    """Supabase client whose query builder chains back to itself."""
    query = MagicMock()
    for method in ("select", "eq", "limit", "order", "upsert", "update", "delete"):
        getattr(query, method).return_value = query
    if error:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=rows or [])
    client = MagicMock()
    client.table.return_value = query
    return client, query


RECIPE_ROW = {
    "user_id": "u1",
    "video_id": "v1",
    "title": "親子丼",
    "ingredients": ["鶏肉 200g", "卵 3個"],
    "steps": ["煮る"],
    "servings": "2人分",
    "cooking_time": "15分",
    "description": "説明",
    "extraction_method": "gemini_text_analysis",
}


def test_recipe_store_get_hit():
    """A stored row comes back as an ExtractedRecipe filtered by user and video."""
    from pantry.storage import RecipeStore
    client, query = _client([RECIPE_ROW])
    recipe = RecipeStore(client).get("u1", "v1")
    assert recipe.title == "親子丼"
    assert recipe.cooking_time == "15分"
    assert recipe.video_id == "v1"
    client.table.assert_called_with("extracted_recipes")
    query.eq.assert_any_call("user_id", "u1")
    query.eq.assert_any_call("video_id", "v1")


def test_recipe_store_get_error_is_miss():
    """Store failures on read count as a cache miss."""
    from pantry.storage import RecipeStore
    client, _ = _client(error=RuntimeError("down"))
    assert RecipeStore(client).get("u1", "v1") is None


def test_recipe_store_without_client():
    """Unconfigured store is an empty cache that never saves."""
    from pantry.storage import RecipeStore
    from pantry.models import ExtractedRecipe
    store = RecipeStore(None)
    assert store.enabled is False
    assert store.get("u1", "v1") is None
    assert store.save("u1", ExtractedRecipe(title="t", video_id="v1")) is False
    assert store.list("u1") == []


def test_recipe_store_save_upserts_row():
    """Save upserts one row keyed on user_id,video_id."""
    from pantry.storage import RecipeStore
    from pantry.models import ExtractedRecipe, Video
    client, query = _client()
    recipe = ExtractedRecipe(title="親子丼", ingredients=("卵 3個",), cooking_time="15分", video_id="v1")
    video = Video(id="v1", title="親子丼", url="https://youtu.be/v1")
    assert RecipeStore(client).save("u1", recipe, video) is True
    row = query.upsert.call_args.args[0]
    assert row["user_id"] == "u1"
    assert row["video_id"] == "v1"
    assert row["cooking_time"] == "15分"
    assert row["ingredients"] == ["卵 3個"]
    assert row["video_url"] == "https://youtu.be/v1"
    assert query.upsert.call_args.kwargs["on_conflict"] == "user_id,video_id"


def test_recipe_store_save_failure_is_logged_not_raised():
    """A failed upsert returns False."""
    from pantry.storage import RecipeStore
    from pantry.models import ExtractedRecipe
    client, _ = _client(error=RuntimeError("conflict"))
    assert RecipeStore(client).save("u1", ExtractedRecipe(title="t", video_id="v1")) is False


def test_recipe_store_list_and_delete():
    """List returns recipes; delete filters by user and video."""
    from pantry.storage import RecipeStore
    client, query = _client([RECIPE_ROW])
    store = RecipeStore(client)
    recipes = store.list("u1")
    assert [r.video_id for r in recipes] == ["v1"]
    query.order.assert_called_with("created_at", desc=True)
    assert store.delete("u1", "v1") is True
    query.delete.assert_called_once()


def test_inventory_store_list():
    """Rows become InventoryEntry values."""
    from pantry.storage import InventoryStore
    client, _ = _client([{"id": "a", "name": "卵", "quantity": 4, "unit": "個", "category": "卵・乳製品"}])
    entries = InventoryStore(client).list("u1")
    assert entries[0].name == "卵"
    assert entries[0].quantity == 4
    client.table.assert_called_with("ingredients")


def test_inventory_store_errors_propagate():
    """Inventory read and write failures raise UpstreamError."""
    from pantry.storage import InventoryStore
    from pantry.errors import UpstreamError
    client, _ = _client(error=RuntimeError("down"))
    store = InventoryStore(client)
    with pytest.raises(UpstreamError):
        store.list("u1")
    with pytest.raises(UpstreamError):
        store.update_quantity("u1", "a", 1.0)


def test_inventory_store_update_quantity():
    """update_quantity writes the new quantity for one id owned by the user."""
    from pantry.storage import InventoryStore
    client, query = _client()
    InventoryStore(client).update_quantity("u1", "a", 1.0)
    query.update.assert_called_once_with({"quantity": 1.0})
    query.eq.assert_any_call("user_id", "u1")
    query.eq.assert_any_call("id", "a")


def test_inventory_store_update_requires_user():
    """Without a user id nothing is written."""
    from pantry.storage import InventoryStore
    client, query = _client()
    InventoryStore(client).update_quantity("", "someone-elses-row", 999)
    query.update.assert_not_called()
    query.execute.assert_not_called()


def test_get_supabase_client_unconfigured():
    """No URL or key means no client."""
    from pantry.storage import get_supabase_client
    with patch("pantry.storage.supabase_store.get_supabase_url", return_value=""):
        assert get_supabase_client() is None


@patch("pantry.storage.supabase_store.create_client")
def test_get_supabase_client_configured(mock_create):
    """With URL and key a client is created."""
    from pantry.storage import get_supabase_client
    with patch("pantry.storage.supabase_store.get_supabase_url", return_value="https://x.supabase.co"):
        with patch("pantry.storage.supabase_store.get_supabase_key", return_value="k"):
            assert get_supabase_client() is mock_create.return_value
    mock_create.assert_called_once_with("https://x.supabase.co", "k")


def test_recipe_store_single_string_list_columns():
    """A text column holding one line stays one line."""
    from pantry.storage import RecipeStore
    client, _ = _client([{**RECIPE_ROW, "ingredients": "卵 2個", "steps": None}])
    recipe = RecipeStore(client).get("u1", "v1")
    assert recipe.ingredients == ("卵 2個",)
    assert recipe.steps == ()
