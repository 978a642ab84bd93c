import os
import sys
from typing import List

import pytest

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from backend.core.chat_orchestrator import ChatOrchestrator
from backend.core.session_store import SessionStore
from backend.llm.gemini_client import CompletionServiceError
from backend.models.content_query import ContentQuery
from backend.models.message import Turn
from backend.tools.post_search_client import PostSearchResult


class FakeCompletionClient:
    """Returns queued raw texts (or raises queued exceptions) and records every message list."""

    def __init__(self, responses=None):
        self.responses = list(responses or [])
        self.calls: List[List[Turn]] = []

    def complete(self, messages):
        self.calls.append(list(messages))
        if not self.responses:
            raise CompletionServiceError("no scripted response")
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakePostSearchClient:
    def __init__(self, result=None, exc=None):
        self.result = result if result is not None else PostSearchResult(ok=True, posts=[])
        self.exc = exc
        self.queries: List[ContentQuery] = []

    def search(self, query):
        self.queries.append(query)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture
def store():
    return SessionStore(max_history=10, session_ttl_minutes=60)


@pytest.fixture
def completion():
    return FakeCompletionClient()


@pytest.fixture
def post_search():
    return FakePostSearchClient()


@pytest.fixture
def orchestrator(store, completion, post_search):
    return ChatOrchestrator(
        session_store=store,
        completion_client=completion,
        post_search_client=post_search,
    )
