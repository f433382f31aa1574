"""
Two-stage recovery of structured data from an untrusted model reply.

Stage 1, recover_candidate_text: pick the text most likely to be the JSON
object (```json fence, else outermost braces, else the raw reply).
Stage 2, parse_recipe_json: strict JSON parse of that candidate.

Keeping the stages apart makes failures attributable: a bad candidate is a
recovery problem, a bad parse is a JSON-shape problem.
"""
import json
import logging
import re
from typing import Any, Dict

from pantry.errors import ExtractionParseError

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\s*(.*?)\s*```", re.IGNORECASE | re.DOTALL)


def recover_candidate_text(raw: str) -> str:
    """Return the candidate JSON text from a raw model reply."""
    fenced = _JSON_FENCE.search(raw)
    if fenced and fenced.group(1):
        return fenced.group(1)

    first_brace = raw.find("{")
    last_brace = raw.rfind("}")
    if first_brace != -1 and last_brace > first_brace:
        return raw[first_brace:last_brace + 1]

    return raw


def parse_recipe_json(candidate: str) -> Dict[str, Any]:
    """Parse the candidate text. Raises ExtractionParseError; never returns a default."""
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        logger.warning("EXTRACT_PARSE invalid json error=%s candidate=%s", e, candidate[:200])
        raise ExtractionParseError(f"Model reply is not valid JSON: {e}", candidate=candidate) from e
    if not isinstance(data, dict):
        logger.warning("EXTRACT_PARSE not an object type=%s", type(data).__name__)
        raise ExtractionParseError(
            f"Model reply is JSON but not an object ({type(data).__name__})",
            candidate=candidate,
        )
    return data
