from fastapi import APIRouter, Depends, Response, status

from resumeiq.core.security import require_api_key
from resumeiq.history.store import HistoryStore, get_history_store
from resumeiq.schemas.analysis import HistoryEntry

router = APIRouter(dependencies=[Depends(require_api_key)])


@router.get("/history/{user_id}", response_model=list[HistoryEntry])
def list_history(user_id: str, history: HistoryStore = Depends(get_history_store)):
    return history.get_user_history(user_id)


@router.delete("/history/{user_id}/{entry_id}", response_model=list[HistoryEntry])
def delete_history_entry(user_id: str, entry_id: str, history: HistoryStore = Depends(get_history_store)):
    return history.delete_from_history(user_id, entry_id)


@router.delete("/history/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def clear_history(user_id: str, history: HistoryStore = Depends(get_history_store)):
    history.clear_history(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
