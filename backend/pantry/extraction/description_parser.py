"""
Heuristic recipe extraction from a video description, used when no
generative model credential is configured.

Walks the description line by line, switching between an ingredients section
and a steps section on header keywords, and picks up servings / cooking time
lines along the way.
"""
import re
import logging
from typing import List, Optional

from pantry.constants import UNITS
from pantry.models.recipe import ExtractedRecipe

logger = logging.getLogger(__name__)

INGREDIENT_HEADERS = ("材料", "ingredient")
STEP_HEADERS = ("作り方", "手順", "レシピ", "method", "instruction", "step")
TIME_HINTS = ("時間", "調理", "time")

# Dropped from steps: channel promotion lines
STEP_NOISE = ("http", "チャンネル", "登録")

# Matched against the title when the description has no ingredient section
COMMON_INGREDIENTS = [
    "玉ねぎ", "にんじん", "じゃがいも", "豚肉", "牛肉", "鶏肉",
    "卵", "米", "パン", "パスタ", "トマト", "きゅうり", "レタス",
    "醤油", "味噌", "塩", "砂糖", "油", "バター", "チーズ",
]

MAX_UNNUMBERED_STEPS = 20

_BULLET = re.compile(r"[・•\-*]")
_LEADING_BULLETS = re.compile(r"^[・•\-*\s]+")
_LEADING_NUMBER = re.compile(r"^\d+[.．)）]")
_LEADING_NUMBER_STRIP = re.compile(r"^\d+[.．)）\s]*")
_DIGIT = re.compile(r"\d")
_UNIT = re.compile("|".join(re.escape(u) for u in UNITS))
_SERVINGS = re.compile(r"(\d+)人分|(\d+)\s*serving", re.IGNORECASE)
_MINUTES = re.compile(r"(\d+)分|(\d+)\s*min", re.IGNORECASE)


def ingredients_from_title(title: str) -> List[str]:
    return [name for name in COMMON_INGREDIENTS if name in title]


def _looks_like_ingredient(line: str) -> bool:
    return bool(_BULLET.search(line) or _DIGIT.search(line) or _UNIT.search(line))


def _looks_like_step(line: str, step_count: int) -> bool:
    if _LEADING_NUMBER.match(line) or _BULLET.search(line):
        return True
    return step_count < MAX_UNNUMBERED_STEPS and 10 < len(line) < 200


def extract_recipe_from_description(title: str, description: str) -> ExtractedRecipe:
    lines = [line.strip() for line in (description or "").split("\n")]
    lines = [line for line in lines if line]

    ingredients: List[str] = []
    steps: List[str] = []
    servings: Optional[str] = None
    cooking_time: Optional[str] = None
    section = ""
    step_count = 0

    for line in lines:
        lower = line.lower()

        if any(h in lower for h in INGREDIENT_HEADERS):
            section = "ingredients"
            continue
        if any(h in lower for h in STEP_HEADERS):
            section = "steps"
            step_count = 0
            continue

        if "人分" in lower or "serving" in lower:
            m = _SERVINGS.search(line)
            if m:
                servings = f"{m.group(1) or m.group(2)}人分"
            continue

        if "分" in lower and any(h in lower for h in TIME_HINTS):
            m = _MINUTES.search(line)
            if m:
                cooking_time = f"{m.group(1) or m.group(2)}分"
            continue

        if section == "ingredients" and _looks_like_ingredient(line):
            cleaned = _LEADING_BULLETS.sub("", line)
            if cleaned and "http" not in cleaned and len(cleaned) < 100:
                ingredients.append(cleaned)

        elif section == "steps" and _looks_like_step(line, step_count):
            cleaned = _LEADING_NUMBER_STRIP.sub("", line)
            cleaned = _LEADING_BULLETS.sub("", cleaned)
            if cleaned and not any(noise in cleaned for noise in STEP_NOISE):
                steps.append(cleaned)
                step_count += 1

    if not ingredients:
        ingredients = ingredients_from_title(title or "")

    logger.info(
        "DESCRIPTION_PARSE title=%s ingredients=%d steps=%d",
        (title or "")[:60], len(ingredients), len(steps),
    )
    return ExtractedRecipe(
        title=title or "",
        ingredients=tuple(ingredients),
        steps=tuple(steps),
        servings=servings,
        cooking_time=cooking_time,
        description=description or "",
        extraction_method="description",
    )
