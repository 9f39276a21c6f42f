import json
import math
import re
from typing import Any, Callable, List

from ..errors import ParseError
from ..models import OPTION_COUNT, QuizItem

UNTITLED_QUESTION = "Untitled question"

_ARRAY_RE = re.compile(r"\[[\s\S]*\]")
_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?([\s\S]*?)\n?```$")

class _NotDecoded(Exception):
    pass

def _decode_direct(text: str) -> Any:
    try:
        return json.loads(text)
    except (ValueError, RecursionError):
        raise _NotDecoded()

def _decode_fenced(text: str) -> Any:
    match = _FENCE_RE.match(text)
    if not match:
        raise _NotDecoded()
    return _decode_direct(match.group(1).strip())

def _decode_embedded_array(text: str) -> Any:
    match = _ARRAY_RE.search(text)
    if not match:
        raise _NotDecoded()
    return _decode_direct(match.group(0))

# Tried in order; the first one that decodes wins.
DECODERS: List[Callable[[str], Any]] = [
    _decode_direct,
    _decode_fenced,
    _decode_embedded_array,
]

def decode_payload(raw_text: str) -> Any:
    text = (raw_text or "").strip()
    for decoder in DECODERS:
        try:
            return decoder(text)
        except _NotDecoded:
            continue
    raise ParseError("Model returned non-JSON output")

def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)

def _normalize_question(value: Any) -> str:
    return _to_text(value).strip() or UNTITLED_QUESTION

def _normalize_options(value: Any) -> List[str]:
    if not isinstance(value, list):
        return [""] * OPTION_COUNT
    options = [_to_text(o) for o in value[:OPTION_COUNT]]
    return options + [""] * (OPTION_COUNT - len(options))

def _normalize_answer(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, float):
        if not math.isfinite(value) or not value.is_integer():
            return 0
        value = int(value)
    if isinstance(value, int) and 0 <= value < OPTION_COUNT:
        return value
    return 0

def normalize_item(raw: Any) -> QuizItem:
    """Repair one decoded element into a valid QuizItem. Never raises."""
    fields = raw if isinstance(raw, dict) else {}
    return QuizItem(
        question=_normalize_question(fields.get("question")),
        options=_normalize_options(fields.get("options")),
        answer=_normalize_answer(fields.get("answer")),
    )

def parse_quiz_items(raw_text: str, expected_count: int) -> List[QuizItem]:
    """Decode model text into at most ``expected_count`` normalized quiz items.

    Raises ParseError when no decoding strategy yields JSON or when the decoded
    value is not an array. Fewer elements than requested are returned as-is.
    """
    if expected_count < 1:
        raise ValueError("expected_count must be positive")
    payload = decode_payload(raw_text)
    if not isinstance(payload, list):
        raise ParseError("Parsed response is not an array")
    return [normalize_item(item) for item in payload[:expected_count]]
