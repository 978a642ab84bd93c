# Role: Deterministic one-liner that accompanies a post search, so "no matches" reads differently
# from "here are posts" without the chat reply itself changing.

from __future__ import annotations

from typing import Any, List

import backend.config as config
from backend.models.content_query import ContentQuery


def build_content_message(posts: List[Any], query: ContentQuery) -> str:
    place = query.label()

    if config.DEBUG:
        print("CONTENT_MESSAGE posts:", len(posts), "place:", place)

    if not posts:
        return f"I couldn't find any posts for {place} right now, but I can still help you plan your trip!"

    return f"Here are some amazing posts from travelers in {place}:"
