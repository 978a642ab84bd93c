# Role: External tool adapter for traveler posts. Calls the posts backend search endpoint and returns a
# bounded list of posts. Never raises for transport/payload problems: ok=False means "no matching content".

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import requests

import backend.config as config
from backend.models.content_query import ContentQuery


@dataclass(frozen=True)
class PostSearchResult:
    ok: bool
    posts: List[Any] = field(default_factory=list)
    error: Optional[str] = None


class PostSearchClient:
    SEARCH_PATH = "/api/posts/search"

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[float] = None,
        max_results: Optional[int] = None,
    ) -> None:
        self.base_url = (base_url or config.POSTS_API_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds or config.POST_SEARCH_TIMEOUT_SECONDS
        self.max_results = max_results or config.POST_SEARCH_MAX_RESULTS

    def _build_params(self, query: ContentQuery) -> List[Tuple[str, str]]:
        # Key line: one "tag" parameter per tag (?tag=beach&tag=food), as the posts backend expects.
        params: List[Tuple[str, str]] = []
        if query.location:
            params.append(("location", query.location))
        for tag in query.tags:
            params.append(("tag", tag))
        return params

    def search(self, query: ContentQuery) -> PostSearchResult:
        # 1) Build query string from location/tags
        # 2) GET the search endpoint (timeout-bounded)
        # 3) Extract the "data" list and cap it
        params = self._build_params(query)

        try:
            r = requests.get(f"{self.base_url}{self.SEARCH_PATH}", params=params, timeout=self.timeout_seconds)
            r.raise_for_status()
            payload = r.json()

            posts = payload.get("data") if isinstance(payload, dict) else None
            if not isinstance(posts, list):
                return PostSearchResult(ok=False, error="Posts payload has no data list")

            # Items are forwarded as-is; only the count is bounded.
            posts = posts[: self.max_results]

            if config.DEBUG:
                print("\n--- POST SEARCH TOOL ---")
                print("REQUEST:", params)
                print("RESULTS:", len(posts))
                print("------------------------\n")

            return PostSearchResult(ok=True, posts=posts)

        except requests.RequestException as e:
            return PostSearchResult(ok=False, error=f"Post search request failed: {e}")
        except (TypeError, ValueError) as e:
            return PostSearchResult(ok=False, error=f"Bad post search payload: {e}")
