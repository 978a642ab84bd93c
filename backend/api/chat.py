# Role: Thin HTTP adapter for the chat endpoints. Validates request/response shapes and delegates the entire
# conversation turn to ChatOrchestrator (business logic lives in core, not in the API layer).

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from backend.api.deps import get_chat_orchestrator
from backend.core.chat_orchestrator import ChatOrchestrator

router = APIRouter(prefix="/chat", tags=["chat"])

class ChatRequest(BaseModel):
    session_id: str = Field(min_length=1)
    user_message: str = Field(min_length=1)

class ChatResponse(BaseModel):
    success: bool = True
    session_id: str
    reply: str
    keywords: Dict[str, Any]
    matched_content: List[Any]
    content_message: Optional[str] = None

class ClearRequest(BaseModel):
    session_id: str

class ClearResponse(BaseModel):
    success: bool
    message: str

@router.post("", response_model=ChatResponse)
def chat(req: ChatRequest, orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator)) -> ChatResponse:
    # 1) Forward (session_id, user_message) to the orchestrator
    # 2) Only an unreachable completion service becomes an HTTP error (503, retryable)
    # 3) Return reply + posts in a stable schema for UI/clients
    result = orchestrator.handle(req.session_id, req.user_message)
    if not result.ok:
        raise HTTPException(status_code=503, detail=result.reply)

    return ChatResponse(
        session_id=result.session_id,
        reply=result.reply,
        keywords=result.keywords,
        matched_content=result.matched_content,
        content_message=result.content_message,
    )

@router.post("/clear", response_model=ClearResponse)
def clear(req: ClearRequest, orchestrator: ChatOrchestrator = Depends(get_chat_orchestrator)) -> ClearResponse:
    # Key line: idempotent, unknown sessions also succeed.
    orchestrator.clear(req.session_id)
    return ClearResponse(success=True, message="Conversation cleared")
