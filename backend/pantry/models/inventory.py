"""
Inventory records and the ephemeral values derived from them during matching.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from pantry.constants import DEFAULT_CATEGORY, DEFAULT_UNIT
from pantry.models.recipe import ExtractedRecipe


def _to_float(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


@dataclass
class InventoryEntry:
    """A user's on-hand stock for one ingredient. Read-only to the matcher."""
    id: str
    name: str
    quantity: float = 0.0
    unit: str = DEFAULT_UNIT
    category: str = DEFAULT_CATEGORY
    expiry_date: Optional[str] = None
    location: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "expiry_date": self.expiry_date,
            "location": self.location,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "InventoryEntry":
        return cls(
            id=str(data.get("id") or ""),
            name=str(data.get("name") or ""),
            quantity=_to_float(data.get("quantity")),
            unit=str(data["unit"]) if data.get("unit") is not None else DEFAULT_UNIT,
            category=str(data.get("category") or DEFAULT_CATEGORY),
            expiry_date=data.get("expiry_date"),
            location=data.get("location"),
        )


@dataclass(frozen=True)
class ParsedIngredientLine:
    name: str
    quantity: float
    unit: str

    def to_dict(self) -> dict:
        return {"name": self.name, "quantity": self.quantity, "unit": self.unit}


@dataclass(frozen=True)
class MatchedIngredient:
    """
    Result of matching one extracted ingredient string against inventory.
    ingredient_id / ingredient_name are "" when unmatched, never None.
    """
    extracted_ingredient: str
    ingredient_id: str = ""
    ingredient_name: str = ""
    available: bool = False
    available_quantity: float = 0
    unit: str = ""

    def to_dict(self) -> dict:
        return {
            "extractedIngredient": self.extracted_ingredient,
            "ingredientId": self.ingredient_id,
            "ingredientName": self.ingredient_name,
            "available": self.available,
            "availableQuantity": self.available_quantity,
            "unit": self.unit,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "MatchedIngredient":
        return cls(
            extracted_ingredient=str(data.get("extractedIngredient") or ""),
            ingredient_id=str(data.get("ingredientId") or ""),
            ingredient_name=str(data.get("ingredientName") or ""),
            available=bool(data.get("available")),
            available_quantity=_to_float(data.get("availableQuantity")),
            unit=str(data.get("unit") or ""),
        )


@dataclass
class CookableRecipe:
    video_id: str
    title: str
    recipe: Optional[ExtractedRecipe] = None
    matched_ingredients: List[MatchedIngredient] = field(default_factory=list)
    match_percentage: int = 0
    status: str = "needs_analysis"

    def to_dict(self) -> dict:
        return {
            "videoId": self.video_id,
            "title": self.title,
            "extractedRecipe": self.recipe.to_dict() if self.recipe else None,
            "matchedIngredients": [m.to_dict() for m in self.matched_ingredients],
            "matchPercentage": self.match_percentage,
            "status": self.status,
        }


@dataclass(frozen=True)
class UsedIngredient:
    """Quantity of one inventory entry consumed by a cooking session."""
    ingredient_id: str
    quantity_used: float
    ingredient_name: str = ""
    unit: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "UsedIngredient":
        return cls(
            ingredient_id=str(data.get("ingredientId") or ""),
            quantity_used=_to_float(data.get("quantityUsed")),
            ingredient_name=str(data.get("ingredientName") or ""),
            unit=str(data.get("unit") or ""),
        )


@dataclass(frozen=True)
class ShoppingItemDraft:
    name: str
    quantity: float
    unit: str
    category: str = DEFAULT_CATEGORY
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "category": self.category,
            "notes": self.notes,
        }
