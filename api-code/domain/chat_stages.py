from __future__ import annotations

from enum import Enum


class ChatStage(str, Enum):
    RECEIVED = "received"
    VALIDATED = "validated"
    TRANSFORMED = "transformed"
    RESPONDED = "responded"
    REJECTED = "rejected"
    FAULTED = "faulted"

    @property
    def is_terminal(self) -> bool:
        return self in {ChatStage.RESPONDED, ChatStage.REJECTED, ChatStage.FAULTED}


HAPPY_PATH: tuple[ChatStage, ...] = (
    ChatStage.RECEIVED,
    ChatStage.VALIDATED,
    ChatStage.TRANSFORMED,
    ChatStage.RESPONDED,
)


def is_valid_transition(current: ChatStage, new: ChatStage) -> bool:
    if current.is_terminal:
        return False
    if new == ChatStage.FAULTED:
        return True
    if new == ChatStage.REJECTED:
        return current == ChatStage.RECEIVED
    try:
        current_index = HAPPY_PATH.index(current)
        new_index = HAPPY_PATH.index(new)
    except ValueError:
        return False
    return new_index == current_index + 1
