from .supabase_store import RecipeStore, InventoryStore, get_supabase_client, recipe_to_row

__all__ = ["RecipeStore", "InventoryStore", "get_supabase_client", "recipe_to_row"]
