# Role: Assembles the message list sent to the completion client:
# one fixed system turn followed by a snapshot of the session's bounded history.

from __future__ import annotations

from typing import List

from backend.models.message import Turn
from backend.models.state import ConversationState
from backend.prompts.system_prompt import build_system_prompt


class PromptBuilder:
    def __init__(self) -> None:
        # Key line: built once; the instructions never come from mutable session state.
        self._system_turn = Turn(role="system", content=build_system_prompt())

    @property
    def system_turn(self) -> Turn:
        return self._system_turn

    def build(self, conversation: ConversationState) -> List[Turn]:
        return [self._system_turn, *conversation.snapshot_history()]
