import json
import re

_FENCE_RE = re.compile(r"```(?:json)?\n?")
_WHITESPACE_RE = re.compile(r"\s+")


def strip_code_fences(text: str) -> str:
    """Remove every markdown fence (```json or ```) and surrounding whitespace."""
    return _FENCE_RE.sub("", text).strip()


def parse_json_object(text: str) -> dict:
    """
    Parse a single JSON object from an AI response.
    Handles markdown code fences; anything else that is not a bare
    object raises ValueError.
    """
    if not text or not text.strip():
        raise ValueError("Empty response from model")

    cleaned = strip_code_fences(text)
    try:
        result = json.loads(cleaned)
    except json.JSONDecodeError as e:
        raise ValueError(f"Could not parse AI response as JSON. Raw response:\n{text[:500]}") from e

    if not isinstance(result, dict):
        raise ValueError("Parsed JSON is not an object")
    return result


def slugify_topic(topic: str) -> str:
    # "Pop Culture" -> "pop-culture"
    return _WHITESPACE_RE.sub("-", topic.strip().lower())
