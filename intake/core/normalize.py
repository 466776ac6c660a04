"""Parsing and normalization of language model output.

Turns the completion text into an EventCandidate. The JSON-shape gate is
literal: the trimmed text must start with '{' or '['. Anything
else (prose, code fences) is rejected rather than repaired.

Normalization never rejects: every field falls back to its default.
"""
import json
import logging
from typing import Any, Dict, Optional

from intake.core.errors import MalformedModelResponseError
from intake.core.schemas import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_LOCATION_NAME,
    DEFAULT_TITLE,
    EventCandidate,
    EventLocation,
)
from intake.core.time_utils import parse_datetime_string

logger = logging.getLogger(__name__)


def parse_model_response(text: Optional[str]) -> Dict[str, Any]:
    """Parse completion text into a dict of raw event fields.

    Raises:
        MalformedModelResponseError: text is not JSON-shaped or not valid JSON
    """
    raw = (text or "{}").strip()

    if not (raw.startswith("{") or raw.startswith("[")):
        raise MalformedModelResponseError(
            "Language model response is not in JSON format", raw_text=raw
        )

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise MalformedModelResponseError(
            f"Language model response is not valid JSON: {e}", raw_text=raw
        ) from e

    # A list means several events; keep the primary (first) one
    if isinstance(data, list):
        data = next((item for item in data if isinstance(item, dict)), {})

    if not isinstance(data, dict):
        return {}
    return data


def _non_empty_str(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value
    return None


def _normalize_location(value: Any) -> EventLocation:
    if isinstance(value, dict):
        name = _non_empty_str(value.get("name"))
        if name:
            return EventLocation(name=name)
    elif _non_empty_str(value):
        return EventLocation(name=value)
    return EventLocation(name=DEFAULT_LOCATION_NAME)


def _normalize_category(data: Dict[str, Any]) -> str:
    # Older prompts asked for "type" instead of "category"
    value = data.get("category") or data.get("type")
    if isinstance(value, str) and value.strip().lower() in CATEGORIES:
        return value.strip().lower()
    return DEFAULT_CATEGORY


def normalize_event(data: Dict[str, Any], timezone: Optional[str] = None) -> EventCandidate:
    """Build an EventCandidate from raw fields, applying every default."""
    candidate = EventCandidate(
        title=_non_empty_str(data.get("title")) or DEFAULT_TITLE,
        datetime=parse_datetime_string(data.get("datetime"), default_tz=timezone),
        location=_normalize_location(data.get("location")),
        description=_non_empty_str(data.get("description")) or "",
        category=_normalize_category(data),
    )

    if data.get("datetime") and candidate.datetime is None:
        logger.info(f"Could not parse datetime {data.get('datetime')!r}, leaving it empty")

    return candidate
