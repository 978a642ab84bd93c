# Role: Single conversation turn (role + content). Stored in ConversationState.history and passed
# to the completion client. Frozen so a turn can't change after it was recorded.

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Role = Literal["system", "user", "assistant"]


class Turn(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role
    content: str

    def as_dict(self) -> dict:
        return {"role": self.role, "content": self.content}
