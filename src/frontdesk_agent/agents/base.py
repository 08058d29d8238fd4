"""Base agent — abstract interface every agent must implement."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from frontdesk_agent.models.session import Persona, Session


@dataclass
class AgentResponse:
    """Value object returned by an agent after processing a message.

    ``session`` is the conversation's next state; it equals the input
    session when nothing changed.  ``end_conversation`` means the session
    must be deleted, whatever ``session`` holds.
    """

    session: Session | None
    reply_text: str | None = None
    persona: Persona | None = None
    end_conversation: bool = False


class BaseAgent(ABC):
    """Abstract base class for the conversation state machines.

    Every agent receives the normalized message text and the current
    session (``None`` when the conversation has none).  It never mutates the
    session; it returns an ``AgentResponse`` describing the next state and
    the reply, if any, to send back.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable agent name (used in logs and routing)."""

    @abstractmethod
    async def handle(
        self,
        message: str,
        session: Session | None,
    ) -> AgentResponse:
        """Process a message and return the resulting transition.

        Parameters
        ----------
        message:
            The trimmed, case-folded message text.
        session:
            The conversation's current session, or ``None``.
        """
