from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Protocol


@dataclass(frozen=True)
class JobSkillSet:
    required: tuple[str, ...]
    nice: tuple[str, ...]

    @property
    def all_skills(self) -> tuple[str, ...]:
        return self.required + self.nice


class TaxonomyProvider(Protocol):
    def normalize_job_title(self, raw: str) -> str:
        """Return the canonical job key for free-text input, or the cleaned input when unknown."""

    def job_skills(self, key: str) -> JobSkillSet | None:
        """Return required/nice skills for a canonical job key."""

    def role_keywords(self) -> Mapping[str, tuple[str, ...]]:
        """Return display role name -> lowercase matching keywords."""

    def skill_catalog(self) -> tuple[str, ...]:
        """Return the master list of detectable skill labels."""

    def strengths(self) -> tuple[str, ...]: ...

    def improvements(self) -> tuple[str, ...]: ...

    def default_roles(self) -> tuple[str, ...]: ...

    def unknown_role_skills_to_acquire(self) -> tuple[str, ...]: ...

    def unknown_role_suggested_skills(self) -> tuple[str, ...]: ...
