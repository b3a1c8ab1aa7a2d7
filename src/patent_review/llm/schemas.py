"""Dialogue data models shared by the assembler and the completion gateway."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class Role(StrEnum):
    """Speaker of a dialogue message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class DialogueMessage:
    """One role-tagged message."""

    role: Role
    content: str

    def to_dict(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


# Ordered, immutable; extending a dialogue returns a new tuple.
Dialogue = tuple[DialogueMessage, ...]
