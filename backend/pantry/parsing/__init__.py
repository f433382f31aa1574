from .ingredient_line import parse_ingredient_line, parse_quantity, normalize_ingredient_text

__all__ = ["parse_ingredient_line", "parse_quantity", "normalize_ingredient_text"]
