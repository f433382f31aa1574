"""
Structured recipe produced by the extraction adapter.
title and description always come from the caller, never from the model.
"""
from dataclasses import dataclass, field
from typing import Any, Optional, Tuple


def _as_str_tuple(values: Any) -> Tuple[str, ...]:
    if not values:
        return ()
    if isinstance(values, str):
        return (values,)
    if not isinstance(values, (list, tuple)):
        return ()
    return tuple(str(v) for v in values if v is not None)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


@dataclass(frozen=True)
class ExtractedRecipe:
    title: str
    ingredients: Tuple[str, ...] = field(default_factory=tuple)
    steps: Tuple[str, ...] = field(default_factory=tuple)
    servings: Optional[str] = None
    cooking_time: Optional[str] = None
    description: str = ""
    extraction_method: str = "gemini_text_analysis"
    video_id: Optional[str] = None

    def is_empty(self) -> bool:
        """True when nothing extractable was found (no ingredients and no steps)."""
        return not self.ingredients and not self.steps

    def to_dict(self) -> dict:
        d = {
            "title": self.title,
            "ingredients": list(self.ingredients),
            "steps": list(self.steps),
            "servings": self.servings,
            "cookingTime": self.cooking_time,
            "description": self.description,
            "extractionMethod": self.extraction_method,
        }
        if self.video_id is not None:
            d["videoId"] = self.video_id
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "ExtractedRecipe":
        """Accepts both wire keys (cookingTime) and row keys (cooking_time)."""
        cooking_time = data.get("cookingTime")
        if cooking_time is None:
            cooking_time = data.get("cooking_time")
        method = data.get("extractionMethod") or data.get("extraction_method") or "gemini_text_analysis"
        video_id = data.get("videoId") or data.get("video_id")
        return cls(
            title=str(data.get("title") or ""),
            ingredients=_as_str_tuple(data.get("ingredients")),
            steps=_as_str_tuple(data.get("steps")),
            servings=_optional_str(data.get("servings")),
            cooking_time=_optional_str(cooking_time),
            description=str(data.get("description") or ""),
            extraction_method=method,
            video_id=video_id,
        )
