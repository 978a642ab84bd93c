# backend/core/chat_orchestrator.py
# Role: Orchestrator for one conversation turn. It glues together:
# session store, prompt building, completion call, response validation, intent routing and post search.

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import backend.config as config
from backend.core.intent_router import IntentRouter
from backend.core.response_validator import ResponseValidator
from backend.core.session_store import SessionStore
from backend.llm.gemini_client import GeminiClient
from backend.models.content_query import ContentQuery
from backend.models.message import Turn
from backend.models.validated_response import ValidatedResponse
from backend.prompts.prompt_builder import PromptBuilder
from backend.tools.post_search_client import PostSearchClient
from backend.utils.content_message import build_content_message

UPSTREAM_UNAVAILABLE = "upstream_unavailable"
UNAVAILABLE_MESSAGE = "The assistant is temporarily unavailable, please retry."


@dataclass(frozen=True)
class ChatResult:
    session_id: str
    reply: str
    keywords: Dict[str, Any] = field(default_factory=dict)
    matched_content: List[Any] = field(default_factory=list)
    content_message: Optional[str] = None
    used_fallback: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatOrchestrator:
    def __init__(
        self,
        session_store: Optional[SessionStore] = None,
        prompt_builder: Optional[PromptBuilder] = None,
        response_validator: Optional[ResponseValidator] = None,
        intent_router: Optional[IntentRouter] = None,
        completion_client: Optional[GeminiClient] = None,
        post_search_client: Optional[PostSearchClient] = None,
    ) -> None:
        # Key line: dependencies are injectable for testing/mocking.
        self.session_store = session_store or SessionStore(
            max_history=config.MAX_HISTORY,
            session_ttl_minutes=config.SESSION_TTL_MINUTES,
        )
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_validator = response_validator or ResponseValidator()
        self.intent_router = intent_router or IntentRouter()
        self.post_search_client = post_search_client or PostSearchClient()

        # Key line: lazy-init avoids crashing at import if GEMINI_API_KEY is missing.
        self._completion_client = completion_client

    def _get_completion_client(self) -> GeminiClient:
        if self._completion_client is None:
            self._completion_client = GeminiClient()
        return self._completion_client

    def handle(self, session_id: str, user_text: str) -> ChatResult:
        # 1) Load/create state and record the user turn
        # 2) Build prompt (system + bounded history) and call the completion service
        # 3) Validate raw text -> record normalized assistant turn
        # 4) Route intent -> optional best-effort post search
        # 5) Return reply + matched posts

        user_turn = Turn(role="user", content=user_text)
        self.session_store.get_or_create(session_id)
        state = self.session_store.append_turn(session_id, user_turn)
        while state is None:
            # Cleared between lookup and append (concurrent /chat/clear): continue in a fresh session.
            self.session_store.get_or_create(session_id)
            state = self.session_store.append_turn(session_id, user_turn)

        # Key line: prompt comes from the state that actually recorded the user turn.
        messages = self.prompt_builder.build(state)

        try:
            raw_text = self._get_completion_client().complete(messages)
        except Exception as e:
            # Key line: user turn stays recorded, so a retry continues the same context.
            if config.DEBUG:
                print("\n!!! COMPLETION ERROR !!!")
                print("SESSION:", session_id)
                print(repr(e))
                print("!!! END ERROR !!!\n")
            return ChatResult(session_id=session_id, reply=UNAVAILABLE_MESSAGE, error=UPSTREAM_UNAVAILABLE)

        validated = self.response_validator.validate(raw_text)
        self.session_store.append_turn(
            session_id,
            Turn(role="assistant", content=validated.to_history_content()),
        )

        query = self.intent_router.route(validated)
        matched_content: List[Any] = []
        content_message: Optional[str] = None
        if query is not None:
            matched_content = self._search_posts(query)
            content_message = build_content_message(matched_content, query)

        if config.DEBUG:
            print("\n--- CHAT DEBUG ---")
            print("SESSION:", session_id)
            print("USER MESSAGE:", user_text)
            print("HISTORY LENGTH:", len(state.snapshot_history()))
            print("USED FALLBACK:", validated.used_fallback)
            print("KEYWORDS:", validated.keywords())
            print("QUERY:", query.model_dump() if query else None)
            print("MATCHED POSTS:", len(matched_content))
            print("------------------\n")

        return self._to_result(session_id, validated, matched_content, content_message)

    def clear(self, session_id: str) -> bool:
        # Always succeeds; the return value only says whether anything was removed.
        return self.session_store.clear(session_id)

    def _search_posts(self, query: ContentQuery) -> List[Any]:
        # Best-effort: any failure degrades to "no matching content".
        try:
            result = self.post_search_client.search(query)
        except Exception as e:
            if config.DEBUG:
                print("[CHAT_ORCHESTRATOR] post search raised:", repr(e))
            return []

        if not result.ok:
            if config.DEBUG:
                print("[CHAT_ORCHESTRATOR] post search failed:", result.error)
            return []
        return list(result.posts)

    def _to_result(
        self,
        session_id: str,
        validated: ValidatedResponse,
        matched_content: List[Any],
        content_message: Optional[str],
    ) -> ChatResult:
        return ChatResult(
            session_id=session_id,
            reply=validated.reply,
            keywords=validated.keywords(),
            matched_content=matched_content,
            content_message=content_message,
            used_fallback=validated.used_fallback,
        )
