"""Deterministic keyword analysis used when the AI provider is unavailable."""

from __future__ import annotations

import logging
import random
from typing import Callable

from resumeiq.analysis.matching import count_keyword_hits, detect_skills, skill_present
from resumeiq.analysis.validation import clamp, round_half_up
from resumeiq.core.config import settings
from resumeiq.core.scoring import get_scoring_value
from resumeiq.schemas.analysis import (
    CURRENT_SKILLS_LIMIT,
    IMPROVEMENTS_LIMIT,
    SKILLS_TO_ACQUIRE_LIMIT,
    STRENGTHS_LIMIT,
    SUGGESTED_SKILLS_LIMIT,
    SUITED_ROLES_LIMIT,
    AnalysisResult,
)
from resumeiq.taxonomy import TaxonomyProvider, get_default_taxonomy_provider

logger = logging.getLogger(__name__)

UnknownRoleMatch = Callable[[], int]


def _num(path: str, default: float) -> float:
    return float(get_scoring_value(path, default))


def default_unknown_role_match() -> UnknownRoleMatch:
    if settings.fallback_unknown_role_mode == "fixed":
        fixed = settings.fallback_unknown_role_match
        return lambda: fixed

    low = int(_num("fallback.unknown_role_match.low", 40))
    high = int(_num("fallback.unknown_role_match.high", 70))
    return lambda: random.randrange(low, high)


def word_count(text: str) -> int:
    return len((text or "").split())


def base_score(words: int, skills: int) -> int:
    raw = (
        _num("fallback.score.base", 45)
        + words * _num("fallback.score.per_word", 0.12)
        + skills * _num("fallback.score.per_skill", 2)
    )
    return round_half_up(clamp(raw, _num("fallback.score.min", 30), _num("fallback.score.max", 95)))


def suited_roles(lower_text: str, taxonomy: TaxonomyProvider) -> list[str]:
    min_hits = int(_num("fallback.roles.min_keyword_hits", 2))
    roles = [
        role
        for role, keywords in taxonomy.role_keywords().items()
        if count_keyword_hits(lower_text, keywords) >= min_hits
    ]
    if not roles:
        roles = list(taxonomy.default_roles())
    limit = min(SUITED_ROLES_LIMIT, int(_num("fallback.roles.max_roles", SUITED_ROLES_LIMIT)))
    return roles[:limit]


def feedback_counts(words: int) -> tuple[int, int]:
    strengths = int(
        clamp(
            words // int(_num("fallback.feedback.strengths_words_per_item", 50)) + 2,
            _num("fallback.feedback.strengths_min", 2),
            _num("fallback.feedback.strengths_max", 6),
        )
    )
    improvements = int(
        clamp(
            int(_num("fallback.feedback.improvements_start", 6))
            - words // int(_num("fallback.feedback.improvements_words_per_step", 70)),
            _num("fallback.feedback.improvements_min", 2),
            _num("fallback.feedback.improvements_max", 6),
        )
    )
    return strengths, improvements


def analyze_resume_fallback(
    resume_text: str,
    job_title: str,
    *,
    taxonomy: TaxonomyProvider | None = None,
    unknown_role_match: UnknownRoleMatch | None = None,
) -> AnalysisResult:
    """Score a resume with keyword heuristics only.

    Total over any input; the minimum-length check belongs to the caller.
    ``job_title`` is kept verbatim on the result.
    """
    taxonomy = taxonomy or get_default_taxonomy_provider()
    lower = (resume_text or "").lower()
    words = word_count(resume_text)

    catalog = taxonomy.skill_catalog()
    current_skills = detect_skills(resume_text, catalog)
    score = base_score(words, len(current_skills))
    roles = suited_roles(lower, taxonomy)

    job_match: int | None = None
    skills_to_acquire: list[str] = []
    suggested_skills: list[str] = []

    if (job_title or "").strip():
        key = taxonomy.normalize_job_title(job_title)
        job_data = taxonomy.job_skills(key)
        if job_data is not None:
            all_skills = job_data.all_skills
            matched = [skill for skill in all_skills if skill_present(lower, skill)]
            job_match = round_half_up(100 * len(matched) / len(all_skills)) if all_skills else 0
            skills_to_acquire = [skill for skill in job_data.required if not skill_present(lower, skill)]
            suggested_skills = [skill for skill in job_data.nice if not skill_present(lower, skill)]
        else:
            source = unknown_role_match or default_unknown_role_match()
            job_match = int(clamp(source(), 0, 100))
            skills_to_acquire = list(taxonomy.unknown_role_skills_to_acquire())
            suggested_skills = list(taxonomy.unknown_role_suggested_skills())
            logger.debug("fallback_unknown_role key=%s job_match=%s", key, job_match)
    else:
        suggested_skills = [skill for skill in catalog if skill not in current_skills]

    num_strengths, num_improvements = feedback_counts(words)

    return AnalysisResult(
        score=score,
        job_match=job_match,
        strengths=list(taxonomy.strengths()[: min(num_strengths, STRENGTHS_LIMIT)]),
        improvements=list(taxonomy.improvements()[: min(num_improvements, IMPROVEMENTS_LIMIT)]),
        current_skills=current_skills[:CURRENT_SKILLS_LIMIT],
        suggested_skills=suggested_skills[:SUGGESTED_SKILLS_LIMIT],
        skills_to_acquire=skills_to_acquire[:SKILLS_TO_ACQUIRE_LIMIT],
        suited_roles=roles,
        job_title=job_title or "",
        is_ai_powered=False,
        analysis_method="fallback",
    )
