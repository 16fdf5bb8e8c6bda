from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AnalysisMethod = Literal["ai", "fallback"]
ProviderName = Literal["openai", "gemini"]

STRENGTHS_LIMIT = 6
IMPROVEMENTS_LIMIT = 6
CURRENT_SKILLS_LIMIT = 12
SUGGESTED_SKILLS_LIMIT = 8
SKILLS_TO_ACQUIRE_LIMIT = 8
SUITED_ROLES_LIMIT = 6


class AnalysisPayload(BaseModel):
    """Scoring fields shared by the AI reply and the fallback engine."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    score: int = Field(ge=1, le=100)
    job_match: int | None = Field(default=None, ge=0, le=100, alias="jobMatch")
    strengths: list[str] = Field(default_factory=list, max_length=STRENGTHS_LIMIT)
    improvements: list[str] = Field(default_factory=list, max_length=IMPROVEMENTS_LIMIT)
    current_skills: list[str] = Field(default_factory=list, max_length=CURRENT_SKILLS_LIMIT, alias="currentSkills")
    suggested_skills: list[str] = Field(
        default_factory=list, max_length=SUGGESTED_SKILLS_LIMIT, alias="suggestedSkills"
    )
    skills_to_acquire: list[str] = Field(
        default_factory=list, max_length=SKILLS_TO_ACQUIRE_LIMIT, alias="skillsToAcquire"
    )
    suited_roles: list[str] = Field(default_factory=list, max_length=SUITED_ROLES_LIMIT, alias="suitedRoles")


class AnalysisResult(AnalysisPayload):
    job_title: str = Field(default="", alias="jobTitle")
    is_ai_powered: bool = Field(default=False, alias="isAIPowered")
    analysis_method: AnalysisMethod = Field(default="fallback", alias="analysisMethod")

    @classmethod
    def from_payload(
        cls,
        payload: AnalysisPayload,
        *,
        job_title: str,
        analysis_method: AnalysisMethod,
    ) -> "AnalysisResult":
        return cls(
            **payload.model_dump(),
            job_title=job_title,
            is_ai_powered=analysis_method == "ai",
            analysis_method=analysis_method,
        )


class AnalyzeRequest(BaseModel):
    resume_text: str = Field(max_length=120000)
    job_title: str = Field(default="", max_length=200)
    provider: ProviderName | None = None
    user_id: str | None = Field(default=None, min_length=1, max_length=200)


class HistoryEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    created_at: str = Field(alias="createdAt")
    resume_snippet: str = Field(alias="resumeSnippet")
    result: AnalysisResult
