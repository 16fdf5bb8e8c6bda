from fastapi import APIRouter, Depends, Query

from resumeiq.analytics import db as analytics_db
from resumeiq.core.security import require_api_key

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.get("/analytics/summary")
def summary():
    return analytics_db.get_summary()


@router.get("/analytics/latest")
def latest(limit: int = Query(default=20, ge=1, le=200)):
    return analytics_db.get_latest_runs(limit=limit)
