# Role: Typed, guaranteed-shaped view of one completion. Produced only by ResponseValidator;
# to_history_content() is the normalized JSON stored as the assistant turn.

from __future__ import annotations

import json
from typing import List

from pydantic import BaseModel, Field, field_validator


class ValidatedResponse(BaseModel):
    reply: str
    location: str = ""
    tags: List[str] = Field(default_factory=list)
    show_posts: bool = False

    # Key line: True means the raw text was not usable JSON and was wrapped verbatim as reply.
    used_fallback: bool = False

    @field_validator("reply")
    @classmethod
    def _reply_not_blank(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("reply must be non-empty")
        return value

    def keywords(self) -> dict:
        return {
            "location": self.location,
            "tags": list(self.tags),
            "showPosts": self.show_posts,
        }

    def to_history_content(self) -> str:
        # Same shape the system prompt asks for, so later prompts only ever see well-formed history.
        return json.dumps({"reply": self.reply, "keywords": self.keywords()}, ensure_ascii=False)
