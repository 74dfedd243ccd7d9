import json
import logging
from typing import Dict, Any, Optional

from humanizer.models import DetectionResult, Scored, Unscored

logger = logging.getLogger(__name__)


def find_json_object(text: str) -> Optional[Dict[str, Any]]:
    """Parse the span between the first '{' and the last '}' of ``text``.

    Models often wrap the JSON in prose or code fences. Returns None when there
    is no such span, it does not parse, or it is not an object.
    """
    if not text or not isinstance(text, str):
        return None

    start = text.find('{')
    end = text.rfind('}')
    if start == -1 or end == -1 or start > end:
        return None

    try:
        parsed = json.loads(text[start:end + 1])
    except (ValueError, RecursionError):
        return None

    return parsed if isinstance(parsed, dict) else None


def _valid_probability(value) -> bool:
    # bool is an int subclass; "true" is not a score
    if isinstance(value, bool) or not isinstance(value, int):
        return False
    return 0 <= value <= 100


def extract_detection(text: str) -> DetectionResult:
    """Turn a free-form detector reply into a Scored or Unscored result. Never raises."""
    raw = (text or '').strip()
    data = find_json_object(raw)
    if data is None:
        logger.debug('detector reply has no parsable JSON object')
        return Unscored(explanation=raw)

    explanation = data.get('explanation')
    if not isinstance(explanation, str):
        explanation = None

    probability = data.get('probability')
    if _valid_probability(probability):
        return Scored(probability=probability, explanation=explanation or '')

    logger.debug('detector reply has unusable probability: %r', probability)
    return Unscored(explanation=explanation or raw)
