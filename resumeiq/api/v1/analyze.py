from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status

from resumeiq.analysis.errors import ValidationError
from resumeiq.core.rate_limit import rate_limit
from resumeiq.history.store import HistoryStore, get_history_store
from resumeiq.schemas.analysis import AnalysisResult, AnalyzeRequest
from resumeiq.services.analysis_service import analyze

router = APIRouter()


@router.post("/analyze", response_model=AnalysisResult)
@rate_limit()
async def analyze_resume(
    request: Request,
    payload: AnalyzeRequest,
    history: HistoryStore = Depends(get_history_store),
):
    _ = request
    try:
        result = await analyze(payload.resume_text, payload.job_title, payload.provider)
    except ValidationError as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)) from exc

    if payload.user_id:
        history.save_best_effort(payload.user_id, payload.resume_text, result)
    return result
