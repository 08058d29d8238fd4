"""Conversation session model — where one chat stands in the flow."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any


class Mode(str, Enum):
    AUTOMATED = "automated"
    MANUAL = "manual"


class Persona(str, Enum):
    """The two human identities a conversation can be attributed to."""

    ATTORNEY = "jonathan"
    SECRETARY = "ingrid"

    @property
    def switch_token(self) -> str:
        """Chat token a customer sends to hand the conversation to this persona."""
        return f"@{self.value}"


# Scripted stages of the automated flow
STAGE_MENU = 1
STAGE_CASE_LOOKUP = 2
STAGE_SCHEDULING = 3
STAGE_SECRETARY = 4

VALID_STAGES = frozenset({STAGE_MENU, STAGE_CASE_LOOKUP, STAGE_SCHEDULING, STAGE_SECRETARY})

# Field names written by the first version of the bot
_LEGACY_KEYS = {"status": "mode", "etapa": "stage", "secretaria": "persona"}


@dataclass(frozen=True)
class Session:
    """Immutable snapshot of one conversation's state.

    ``stage`` only carries meaning while ``mode`` is automated.  ``persona``
    is kept when the conversation is handed to a human so it survives the
    handoff.
    """

    mode: Mode = Mode.AUTOMATED
    stage: int = STAGE_MENU
    persona: Persona = Persona.ATTORNEY

    @classmethod
    def start(cls) -> Session:
        """A freshly engaged automated conversation."""
        return cls()

    @classmethod
    def manual(cls) -> Session:
        """A conversation opened by the office, never auto-engaged."""
        return cls(mode=Mode.MANUAL)

    @property
    def is_manual(self) -> bool:
        return self.mode is Mode.MANUAL

    def with_stage(self, stage: int, persona: Persona | None = None) -> Session:
        return replace(self, stage=stage, persona=persona or self.persona)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"mode": self.mode.value}
        if self.mode is Mode.AUTOMATED:
            data["stage"] = self.stage
        data["persona"] = self.persona.value
        return data

    @classmethod
    def from_dict(cls, data: Any) -> Session | None:
        """Build a session from its persisted form.

        Returns ``None`` for anything with an absent or invalid ``mode`` or
        ``stage``; such a record is treated as if no session existed.
        """
        if not isinstance(data, dict):
            return None
        data = {_LEGACY_KEYS.get(key, key): value for key, value in data.items()}

        try:
            mode = Mode(data.get("mode"))
        except ValueError:
            return None

        try:
            persona = Persona(data.get("persona", Persona.ATTORNEY.value))
        except ValueError:
            persona = Persona.ATTORNEY

        if mode is Mode.MANUAL:
            return cls(mode=mode, persona=persona)

        stage = data.get("stage")
        if isinstance(stage, bool) or not isinstance(stage, int) or stage not in VALID_STAGES:
            return None
        return cls(mode=mode, stage=stage, persona=persona)
