from __future__ import annotations

import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .provider import JobSkillSet, TaxonomyProvider

_DATA_DIR = Path(__file__).resolve().parent


def _as_labels(value: Any, *, source: Path, field: str) -> tuple[str, ...]:
    if not isinstance(value, list):
        raise RuntimeError(f"Invalid taxonomy file '{source}': '{field}' must be a list.")
    return tuple(str(item) for item in value)


class LocalTaxonomy(TaxonomyProvider):
    def __init__(self, data_dir: str | Path | None = None) -> None:
        base = Path(data_dir) if data_dir else _DATA_DIR
        self._job_skills = self._load_job_skills(base / "job_skills.json")
        self._role_keywords = self._load_role_keywords(base / "role_keywords.json")
        self._catalog = self._load_catalog(base / "skill_catalog.json")
        phrases_path = base / "phrases.json"
        phrases = self._load_json(phrases_path)
        if not isinstance(phrases, dict):
            raise RuntimeError(f"Invalid taxonomy file '{phrases_path}': expected a top-level mapping.")
        self._phrases = {
            name: _as_labels(phrases.get(name), source=phrases_path, field=name)
            for name in (
                "strengths",
                "improvements",
                "default_roles",
                "unknown_role_skills_to_acquire",
                "unknown_role_suggested_skills",
            )
        }

    @staticmethod
    def _load_json(path: Path) -> Any:
        try:
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise RuntimeError(f"Unable to load taxonomy file '{path}': {exc}") from exc

    @classmethod
    def _load_job_skills(cls, path: Path) -> Mapping[str, JobSkillSet]:
        raw = cls._load_json(path)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid taxonomy file '{path}': expected a top-level mapping.")
        table: dict[str, JobSkillSet] = {}
        for key, entry in raw.items():
            if not isinstance(entry, dict):
                raise RuntimeError(f"Invalid taxonomy file '{path}': entry '{key}' must be a mapping.")
            table[str(key).strip().lower()] = JobSkillSet(
                required=_as_labels(entry.get("required"), source=path, field=f"{key}.required"),
                nice=_as_labels(entry.get("nice"), source=path, field=f"{key}.nice"),
            )
        return MappingProxyType(table)

    @classmethod
    def _load_role_keywords(cls, path: Path) -> Mapping[str, tuple[str, ...]]:
        raw = cls._load_json(path)
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid taxonomy file '{path}': expected a top-level mapping.")
        table = {
            str(role): tuple(keyword.lower() for keyword in _as_labels(keywords, source=path, field=str(role)))
            for role, keywords in raw.items()
        }
        return MappingProxyType(table)

    @classmethod
    def _load_catalog(cls, path: Path) -> tuple[str, ...]:
        return _as_labels(cls._load_json(path), source=path, field="catalog")

    def normalize_job_title(self, raw: str) -> str:
        lower = (raw or "").strip().lower()
        for key in self._job_skills:
            # Declaration order decides ties, e.g. "engineer" -> "software engineer".
            if key in lower or lower in key:
                return key
        return lower

    def job_skills(self, key: str) -> JobSkillSet | None:
        return self._job_skills.get(key)

    def job_keys(self) -> tuple[str, ...]:
        return tuple(self._job_skills)

    def role_keywords(self) -> Mapping[str, tuple[str, ...]]:
        return self._role_keywords

    def skill_catalog(self) -> tuple[str, ...]:
        return self._catalog

    def strengths(self) -> tuple[str, ...]:
        return self._phrases["strengths"]

    def improvements(self) -> tuple[str, ...]:
        return self._phrases["improvements"]

    def default_roles(self) -> tuple[str, ...]:
        return self._phrases["default_roles"]

    def unknown_role_skills_to_acquire(self) -> tuple[str, ...]:
        return self._phrases["unknown_role_skills_to_acquire"]

    def unknown_role_suggested_skills(self) -> tuple[str, ...]:
        return self._phrases["unknown_role_suggested_skills"]
