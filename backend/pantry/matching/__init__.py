"""
Inventory matching and cookability scoring.
"""
from .matcher import match_ingredients, calculate_match_percentage, find_inventory_match
from .ranking import RankStatus, rank_cookable_recipes, build_cookable_recipe

__all__ = [
    "match_ingredients",
    "calculate_match_percentage",
    "find_inventory_match",
    "RankStatus",
    "rank_cookable_recipes",
    "build_cookable_recipe",
]
