"""
Match extracted ingredient strings against a user's inventory and score how
much of a recipe can be cooked right now.

Matching is a case-insensitive substring test on the raw extracted string.
The first inventory entry that satisfies any clause wins; there is no
best-match scoring. Pure functions: inputs are never mutated.
"""
import logging
from typing import Any, List, Mapping, Optional, Sequence, Union

from pantry.models.inventory import InventoryEntry, MatchedIngredient

logger = logging.getLogger(__name__)

InventoryLike = Union[InventoryEntry, Mapping[str, Any]]


def _field(item: InventoryLike, name: str, default: Any = None) -> Any:
    if isinstance(item, Mapping):
        return item.get(name, default)
    return getattr(item, name, default)


def _quantity(item: InventoryLike) -> float:
    try:
        return float(_field(item, "quantity", 0) or 0)
    except (TypeError, ValueError):
        return 0.0


def _is_match(extracted_lower: str, tokens: List[str], inventory_name: str) -> bool:
    inv_lower = inventory_name.lower()
    if inv_lower in extracted_lower:
        return True
    # Clauses on tokens are skipped for blank strings (no tokens)
    if tokens and tokens[0] in inv_lower:
        return True
    return any(token in inv_lower for token in tokens)


def find_inventory_match(extracted: str, inventory: Sequence[InventoryLike]) -> Optional[InventoryLike]:
    """First inventory entry matching the extracted string, or None."""
    extracted_lower = extracted.lower()
    tokens = extracted_lower.split()
    for item in inventory:
        if _is_match(extracted_lower, tokens, str(_field(item, "name", "") or "")):
            return item
    return None


def match_ingredients(
    extracted_ingredients: Sequence[str],
    inventory: Sequence[InventoryLike],
) -> List[MatchedIngredient]:
    """
    One MatchedIngredient per extracted string, in input order.
    available is True only when a match exists and its quantity is > 0.
    """
    matches: List[MatchedIngredient] = []
    for extracted in extracted_ingredients:
        item = find_inventory_match(extracted, inventory)
        if item is None:
            matches.append(MatchedIngredient(extracted_ingredient=extracted))
            continue
        quantity = _quantity(item)
        matches.append(
            MatchedIngredient(
                extracted_ingredient=extracted,
                ingredient_id=str(_field(item, "id", "") or ""),
                ingredient_name=str(_field(item, "name", "") or ""),
                available=quantity > 0,
                available_quantity=quantity,
                unit=str(_field(item, "unit", "") or ""),
            )
        )
    logger.debug(
        "MATCH extracted=%d available=%d",
        len(matches), sum(1 for m in matches if m.available),
    )
    return matches


def calculate_match_percentage(matched_ingredients: Sequence[MatchedIngredient]) -> int:
    """round(100 * available / total); 0 for an empty list."""
    if not matched_ingredients:
        return 0
    available_count = sum(1 for m in matched_ingredients if m.available)
    return _round_half_up(available_count * 100 / len(matched_ingredients))


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; 12.5 must become 13 here
    return int(value + 0.5)
