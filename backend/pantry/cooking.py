"""
Inventory changes after cooking, and shopping list drafts for what is missing.
These return new values; persisting them is the storage layer's job.
"""
import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Sequence, Tuple

from pantry.constants import DEFAULT_CATEGORY, LOW_STOCK_THRESHOLD
from pantry.models.inventory import InventoryEntry, MatchedIngredient, ShoppingItemDraft, UsedIngredient
from pantry.parsing.ingredient_line import parse_ingredient_line

logger = logging.getLogger(__name__)


def deplete_inventory(
    inventory: Sequence[InventoryEntry],
    used: Iterable[UsedIngredient],
) -> Tuple[List[InventoryEntry], List[Tuple[str, float]]]:
    """
    Subtract used quantities, clamping at zero. Unknown ingredient ids are ignored.
    Returns (new_inventory, [(ingredient_id, new_quantity), ...]).
    """
    by_id: Dict[str, InventoryEntry] = {entry.id: entry for entry in inventory}
    updates: List[Tuple[str, float]] = []
    for u in used:
        entry = by_id.get(u.ingredient_id)
        if entry is None:
            logger.warning("COOKING unknown ingredient_id=%s", u.ingredient_id)
            continue
        new_quantity = max(0.0, entry.quantity - u.quantity_used)
        by_id[u.ingredient_id] = replace(entry, quantity=new_quantity)
        updates.append((u.ingredient_id, new_quantity))
    new_inventory = [by_id[entry.id] for entry in inventory]
    logger.info("COOKING depleted=%d", len(updates))
    return new_inventory, updates


def available_inventory(inventory: Sequence[InventoryEntry]) -> List[InventoryEntry]:
    return [e for e in inventory if e.quantity > 0]


def low_stock(inventory: Sequence[InventoryEntry], threshold: float = LOW_STOCK_THRESHOLD) -> List[InventoryEntry]:
    return [e for e in inventory if 0 < e.quantity <= threshold]


def missing_to_shopping_items(matched: Iterable[MatchedIngredient]) -> List[ShoppingItemDraft]:
    """One shopping list draft per unavailable ingredient, quantity/unit parsed from its line."""
    items: List[ShoppingItemDraft] = []
    for m in matched:
        if m.available:
            continue
        parsed = parse_ingredient_line(m.extracted_ingredient)
        items.append(
            ShoppingItemDraft(
                name=parsed.name or m.extracted_ingredient.strip(),
                quantity=parsed.quantity,
                unit=parsed.unit,
                category=DEFAULT_CATEGORY,
                notes=m.extracted_ingredient,
            )
        )
    return items
