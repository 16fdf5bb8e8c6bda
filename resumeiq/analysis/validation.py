"""Turn untrusted analysis payloads into ``AnalysisPayload`` values.

Everything here is total: wrong types, missing keys and out-of-range
numbers degrade to defaults instead of raising. Remote replies go through
``parse_ai_reply`` so callers only ever see ``WellFormed`` or ``Malformed``.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Union

from resumeiq.analysis.errors import MalformedPayloadError
from resumeiq.schemas.analysis import (
    CURRENT_SKILLS_LIMIT,
    IMPROVEMENTS_LIMIT,
    SKILLS_TO_ACQUIRE_LIMIT,
    STRENGTHS_LIMIT,
    SUGGESTED_SKILLS_LIMIT,
    SUITED_ROLES_LIMIT,
    AnalysisPayload,
)

logger = logging.getLogger(__name__)

_DEFAULT_SCORE = 50
_DEFAULT_JOB_MATCH = 0
_JSON_DECODER = json.JSONDecoder()

_LIST_FIELDS: tuple[tuple[str, str, int], ...] = (
    ("strengths", "strengths", STRENGTHS_LIMIT),
    ("improvements", "improvements", IMPROVEMENTS_LIMIT),
    ("current_skills", "currentSkills", CURRENT_SKILLS_LIMIT),
    ("suggested_skills", "suggestedSkills", SUGGESTED_SKILLS_LIMIT),
    ("skills_to_acquire", "skillsToAcquire", SKILLS_TO_ACQUIRE_LIMIT),
    ("suited_roles", "suitedRoles", SUITED_ROLES_LIMIT),
)


@dataclass(frozen=True)
class WellFormed:
    payload: AnalysisPayload


@dataclass(frozen=True)
class Malformed:
    raw: str
    reason: str


ParsedReply = Union[WellFormed, Malformed]


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float, high: float) -> float:
    return min(high, max(low, value))


def _field(raw: dict[str, Any], camel: str, snake: str) -> tuple[bool, Any]:
    if camel in raw:
        return True, raw[camel]
    if snake in raw:
        return True, raw[snake]
    return False, None


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf if value > 0 else -math.inf
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(number):
        return None
    return number


def _bounded_int(value: Any, *, default: int, low: int, high: int) -> int:
    number = _as_number(value)
    # A numeric 0 counts as missing; a "0" string does not.
    if number is None or (number == 0 and not isinstance(value, str)):
        number = float(default)
    return round_half_up(clamp(number, low, high))


def _label_list(value: Any, limit: int) -> list[str]:
    if not isinstance(value, (list, tuple)):
        return []
    labels: list[str] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (str, int, float)):
            continue
        text = str(item).strip()
        if text:
            labels.append(text)
    return labels[:limit]


def normalize_payload(raw: Any) -> AnalysisPayload:
    if not isinstance(raw, dict):
        raw = {}

    _, score = _field(raw, "score", "score")
    has_match, job_match = _field(raw, "jobMatch", "job_match")

    values: dict[str, Any] = {
        "score": _bounded_int(score, default=_DEFAULT_SCORE, low=1, high=100),
        "job_match": (
            None
            if has_match and job_match is None
            else _bounded_int(job_match, default=_DEFAULT_JOB_MATCH, low=0, high=100)
        ),
    }
    for name, alias, limit in _LIST_FIELDS:
        _, items = _field(raw, alias, name)
        values[name] = _label_list(items, limit)
    return AnalysisPayload(**values)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Return the first top-level JSON object embedded in ``text``."""
    if not text:
        return None
    index = text.find("{")
    while index != -1:
        try:
            parsed, _ = _JSON_DECODER.raw_decode(text, index)
        except ValueError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
        index = text.find("{", index + 1)
    return None


def _require_object(text: str) -> dict[str, Any]:
    if not (text or "").strip():
        raise MalformedPayloadError("AI reply was empty.", code="empty_response")
    parsed = extract_json_object(text)
    if parsed is None:
        raise MalformedPayloadError("No valid JSON object found in AI reply.", code="invalid_json")
    return parsed


def parse_ai_reply(text: str) -> ParsedReply:
    try:
        parsed = _require_object(text)
    except MalformedPayloadError as exc:
        logger.info("ai_reply_malformed code=%s reply_len=%s", exc.code, len(text or ""))
        return Malformed(raw=text or "", reason=exc.code)
    return WellFormed(payload=normalize_payload(parsed))
