# Role: Small typed contract between IntentRouter and the post search client.
# Validator enforces "at least one search key", so the client never sends an empty search.

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ContentQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_has_key(self):
        if not self.location and not self.tags:
            raise ValueError("ContentQuery needs a location or at least one tag")
        return self

    def label(self) -> str:
        # Human-friendly place name for user-facing messages.
        if self.location:
            return self.location.title()
        if self.tags:
            return self.tags[0]
        return "this area"
