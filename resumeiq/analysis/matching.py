"""Keyword matching used by the fallback engine.

Skills are detected by a single probe token: the first word of the label,
with ``/`` treated as a separator. "REST APIs" is found by "rest" and
"HTML/CSS" by "html". This favours recall over precision; swap
``skill_present`` to change the policy everywhere at once.
"""

from __future__ import annotations

from typing import Iterable, Sequence


def probe_token(label: str) -> str:
    parts = label.lower().replace("/", " ").split()
    return parts[0] if parts else ""


def skill_present(lower_text: str, label: str) -> bool:
    token = probe_token(label)
    return bool(token) and token in lower_text


def detect_skills(text: str, catalog: Sequence[str]) -> list[str]:
    lower = (text or "").lower()
    return [skill for skill in catalog if skill_present(lower, skill)]


def count_keyword_hits(lower_text: str, keywords: Iterable[str]) -> int:
    return sum(1 for keyword in keywords if keyword in lower_text)
