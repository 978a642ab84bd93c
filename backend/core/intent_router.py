# Role: Decides whether a validated reply should trigger a post search, and with which keys.
# Pure decision: it builds a ContentQuery but never calls the search service itself.

from __future__ import annotations

from typing import List, Optional

import backend.config as config
from backend.models.content_query import ContentQuery
from backend.models.validated_response import ValidatedResponse

# Same cap the posts backend enforces on tags per post.
MAX_QUERY_TAGS = 10


class IntentRouter:
    def route(self, validated: ValidatedResponse) -> Optional[ContentQuery]:
        # 1) showPosts false -> no search
        # 2) Normalize location + tags (trim, lower-case, de-duplicate)
        # 3) Nothing left to search on -> no search (trace it, not an error)
        if not validated.show_posts:
            return None

        location = self._normalize(validated.location)
        tags = self._normalize_tags(validated.tags)

        if not location and not tags:
            if config.DEBUG:
                print("[INTENT_ROUTER] showPosts=true but no location/tags to search on")
            return None

        query = ContentQuery(location=location or None, tags=tags)
        if config.DEBUG:
            print("[INTENT_ROUTER] post search query:", query.model_dump())
        return query

    def _normalize(self, value: str) -> str:
        return (value or "").strip().lower()

    def _normalize_tags(self, tags: List[str]) -> List[str]:
        out: List[str] = []
        for tag in tags or []:
            cleaned = self._normalize(tag)
            if cleaned and cleaned not in out:
                out.append(cleaned)
        return out[:MAX_QUERY_TAGS]
