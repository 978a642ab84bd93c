# Role: Read-only transparency endpoint for the UI.
# Does NOT change any flow logic (and does not count as activity). Only exposes a state snapshot by session_id.

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from backend.api.deps import get_session_store
from backend.core.session_store import SessionStore

router = APIRouter(tags=["state"])

class StateSnapshot(BaseModel):
    session_id: str
    turn_count: int
    history_length: int
    max_history: int
    created_at: datetime
    last_activity_at: datetime

@router.get("/state/{session_id}", response_model=StateSnapshot)
def get_state(session_id: str, store: SessionStore = Depends(get_session_store)) -> StateSnapshot:
    state = store.peek(session_id)
    if state is None:
        raise HTTPException(status_code=404, detail="Session not found")
    return StateSnapshot(
        session_id=session_id,
        turn_count=state.turn_count,
        history_length=len(state.snapshot_history()),
        max_history=store.max_history,
        created_at=state.created_at,
        last_activity_at=state.last_activity_at,
    )
