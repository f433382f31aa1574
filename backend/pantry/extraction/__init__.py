"""
Recipe extraction: generative model adapter plus a description heuristic.
"""
from .client import GenerativeTextClient
from .prompt import build_extraction_prompt
from .recovery import recover_candidate_text, parse_recipe_json
from .extractor import RecipeExtractor, extract_recipe, validate_extraction_input
from .description_parser import extract_recipe_from_description

__all__ = [
    "GenerativeTextClient",
    "build_extraction_prompt",
    "recover_candidate_text",
    "parse_recipe_json",
    "RecipeExtractor",
    "extract_recipe",
    "validate_extraction_input",
    "extract_recipe_from_description",
]
