"""Operator agent — reacts to messages the office itself sends into a chat."""

from __future__ import annotations

import logging
from dataclasses import replace

from frontdesk_agent.agents.base import AgentResponse, BaseAgent
from frontdesk_agent.models.session import Mode, Session

logger = logging.getLogger(__name__)

# Either keyword hands the chat back to the automated flow
REACTIVATE_KEYWORDS = frozenset({"encerrar", "automatico"})


class OperatorAgent(BaseAgent):
    """Handoff rules for operator-authored messages.

    The operator never gets a reply.  Writing into a chat takes it over
    (automated → manual), writing to a new chat opens it in manual mode, and
    a reactivation keyword deletes the session so the next customer message
    starts the automated flow from scratch.
    """

    @property
    def name(self) -> str:
        return "OperatorAgent"

    async def handle(self, message: str, session: Session | None) -> AgentResponse:
        if message in REACTIVATE_KEYWORDS:
            if session is None:
                logger.debug("Reactivation keyword with no session, nothing to do")
            return AgentResponse(session=None, end_conversation=session is not None)

        if session is None:
            return AgentResponse(session=Session.manual())

        if session.mode is Mode.AUTOMATED:
            return AgentResponse(session=replace(session, mode=Mode.MANUAL))

        return AgentResponse(session=session)
