"""
Parse one free-text ingredient line into (name, quantity, unit).

Lines come from the extraction model and are mostly Japanese, with mixed
full-width/half-width digits, fractions ("1/2") and ranges ("2〜3").

Patterns are tried in order, first match wins:
  1. <name> <quantity><unit>        "豚バラ肉 100g"
  2. <name> 少々 | <name> 適量        "塩 少々"
  3. <name> <quantity>               "卵 1"        (unit defaults to 個)
Anything else falls back to the whole trimmed line as the name.
parse_ingredient_line never raises.
"""
import re
import logging
from typing import Optional

from pantry.constants import UNITS, NON_NUMERIC_UNITS, DEFAULT_UNIT, DEFAULT_QUANTITY
from pantry.models.inventory import ParsedIngredientLine

logger = logging.getLogger(__name__)

RANGE_SEPARATOR = "-"

# Full-width digits, decimal point, slash and both tilde variants -> half-width
_FULLWIDTH_TABLE = str.maketrans(
    {
        **{chr(0xFF10 + i): str(i) for i in range(10)},
        "．": ".",
        "／": "/",
        "〜": RANGE_SEPARATOR,  # U+301C wave dash
        "～": RANGE_SEPARATOR,  # U+FF5E fullwidth tilde
        "~": RANGE_SEPARATOR,
    }
)

_UNIT_ALT = "|".join(re.escape(u) for u in UNITS)
_QUANTITY = r"([0-9./\-]+)"

_NAME_QUANTITY_UNIT = re.compile(rf"^(.*?)\s*{_QUANTITY}\s*({_UNIT_ALT})\Z")
_NAME_UNIT = re.compile(rf"^(.*?)\s*({_UNIT_ALT})\Z")
_NAME_QUANTITY = re.compile(rf"^(.*?)\s*{_QUANTITY}\Z")

_LEADING_INT = re.compile(r"\d+")
_LEADING_FLOAT = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def normalize_ingredient_text(text: str) -> str:
    """Convert full-width numerals to half-width and unify range tildes to '-'."""
    return text.translate(_FULLWIDTH_TABLE)


def _leading_int(s: str) -> Optional[int]:
    m = _LEADING_INT.match(s.strip())
    return int(m.group()) if m else None


def _leading_float(s: str) -> Optional[float]:
    m = _LEADING_FLOAT.match(s.strip())
    return float(m.group()) if m else None


def parse_quantity(quantity_str: str) -> float:
    """
    "1/2" -> 0.5, "2-3" -> 3.0 (upper bound of a range), "1.5" -> 1.5.
    Anything unparseable (including a zero denominator) -> 1.0.
    """
    value: Optional[float]
    if "/" in quantity_str:
        numerator, denominator = quantity_str.split("/")[:2]
        num = _leading_int(numerator)
        den = _leading_int(denominator)
        value = num / den if num is not None and den else None
    elif RANGE_SEPARATOR in quantity_str:
        value = _leading_float(quantity_str.split(RANGE_SEPARATOR)[1])
    else:
        value = _leading_float(quantity_str)
    return DEFAULT_QUANTITY if value is None else value


def parse_ingredient_line(line: str) -> ParsedIngredientLine:
    """Best-effort (name, quantity, unit) for one ingredient line."""
    if line is None:
        line = ""
    elif not isinstance(line, str):
        line = str(line)
    normalized = normalize_ingredient_text(line).strip()

    match = _NAME_QUANTITY_UNIT.match(normalized)
    if match:
        return ParsedIngredientLine(
            name=match.group(1).strip(),
            quantity=parse_quantity(match.group(2)),
            unit=match.group(3),
        )

    match = _NAME_UNIT.match(normalized)
    if match and match.group(2) in NON_NUMERIC_UNITS:
        return ParsedIngredientLine(name=match.group(1).strip(), quantity=DEFAULT_QUANTITY, unit=match.group(2))

    match = _NAME_QUANTITY.match(normalized)
    if match:
        return ParsedIngredientLine(
            name=match.group(1).strip(),
            quantity=parse_quantity(match.group(2)),
            unit=DEFAULT_UNIT,
        )

    logger.debug("INGREDIENT_PARSE fallback line=%s", line[:60])
    return ParsedIngredientLine(name=line.strip(), quantity=DEFAULT_QUANTITY, unit=DEFAULT_UNIT)
