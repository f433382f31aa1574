"""
Fixed vocabularies shared by the parser, matcher and kitchen helpers.
"""
import re

# Ingredient categories (display values)
CATEGORIES = [
    "野菜",
    "肉類",
    "魚介類",
    "乳製品",
    "調味料",
    "冷凍食品",
    "その他",
]

# Unit vocabulary recognized by the ingredient line parser. Order matters for
# the alternation only where one unit is a prefix of another.
UNITS = [
    "個",
    "g",
    "kg",
    "ml",
    "L",
    "本",
    "枚",
    "袋",
    "パック",
    "大さじ",
    "小さじ",
    "カップ",
    "cc",
    "少々",
    "適量",
]

# Units with no numeric meaning ("a pinch", "to taste")
NON_NUMERIC_UNITS = frozenset({"少々", "適量"})

DEFAULT_UNIT = "個"
DEFAULT_QUANTITY = 1.0
DEFAULT_CATEGORY = "その他"

LOCATIONS = [
    "冷蔵庫",
    "冷凍庫",
    "常温",
    "野菜室",
]

COOKING_STATUSES = [
    "preparing",
    "cooking",
    "completed",
]

EXTRACTION_METHODS = [
    "gemini_video_analysis",
    "gemini_text_analysis",
    "description",
    "database",
    "captions",
    "ai_analysis",
]

DEFAULTS = {
    "ingredient": {"quantity": 1, "category": DEFAULT_CATEGORY, "unit": DEFAULT_UNIT},
    "shopping_item": {"quantity": 1, "category": DEFAULT_CATEGORY, "unit": DEFAULT_UNIT, "is_purchased": False},
    "cooking_session": {"servings": 2, "cooking_time": 30, "status": "preparing"},
}

EXPIRY_WARNING_DAYS = 3
LOW_STOCK_THRESHOLD = 2

YOUTUBE_URL_REGEX = re.compile(
    r"(?:youtube\.com/(?:[^/]+/.+/|(?:v|e(?:mbed)?)/|.*[?&]v=)|youtu\.be/)([^\"&?/\s]{11})"
)


def is_valid_category(category: str) -> bool:
    return category in CATEGORIES

def is_valid_unit(unit: str) -> bool:
    return unit in UNITS

def is_valid_location(location: str) -> bool:
    return location in LOCATIONS

def is_valid_cooking_status(status: str) -> bool:
    return status in COOKING_STATUSES

def is_valid_extraction_method(method: str) -> bool:
    return method in EXTRACTION_METHODS
