"""Reception agent — scripted automated flow answering customers."""

from __future__ import annotations

import logging

from frontdesk_agent.agents import messages
from frontdesk_agent.agents.base import AgentResponse, BaseAgent
from frontdesk_agent.models.session import (
    STAGE_CASE_LOOKUP,
    STAGE_MENU,
    STAGE_SCHEDULING,
    STAGE_SECRETARY,
    Persona,
    Session,
)

logger = logging.getLogger(__name__)

# ── Customer keywords ────────────────────────────────────
END_KEYWORD = "encerrar"
MENU_KEYWORD = "menu"

OPTION_CASE_STATUS = "1"
OPTION_FEE = "2"
OPTION_SCHEDULE = "3"
OPTION_SECRETARY = "4"

ATTORNEY = Persona.ATTORNEY
SECRETARY = Persona.SECRETARY


class ReceptionAgent(BaseAgent):
    """Front-desk flow for customer messages.

    Flow
    ----
    1. A customer with no session gets the welcome menu, whatever they wrote.
    2. Manual sessions are left alone: a human is answering.
    3. ``encerrar`` ends the conversation and deletes the session.
    4. ``@ingrid`` / ``@jonathan`` hand the chat to the other persona.
    5. ``menu`` goes back to the menu.
    6. Anything else is interpreted according to the current stage.

    ``AgentResponse.persona`` is the persona the reply speaks as; it is
    ``None`` for office-wide texts such as the menu.
    """

    @property
    def name(self) -> str:
        return "ReceptionAgent"

    async def handle(self, message: str, session: Session | None) -> AgentResponse:
        """Compute the next session and reply for a customer message."""
        if session is None:
            return AgentResponse(
                session=Session.start(), reply_text=messages.WELCOME, persona=ATTORNEY
            )

        if session.is_manual:
            return AgentResponse(session=session)

        if message == END_KEYWORD:
            return AgentResponse(
                session=None, reply_text=messages.CLOSING, end_conversation=True
            )

        switch = self._handle_persona_switch(message, session)
        if switch is not None:
            return switch

        if message == MENU_KEYWORD:
            return self._reply(session, STAGE_MENU, messages.MENU, speaker=None)

        if session.stage == STAGE_CASE_LOOKUP:
            return self._reply(session, STAGE_MENU, messages.CASE_LOOKUP_ACK, ATTORNEY)
        if session.stage == STAGE_SCHEDULING:
            return self._reply(session, STAGE_MENU, messages.SCHEDULING_ACK, ATTORNEY)
        if session.stage == STAGE_SECRETARY:
            return self._reply(session, STAGE_MENU, messages.SECRETARY_ACK, SECRETARY)
        return self._handle_menu_choice(message, session)

    # ── Private helpers ──────────────────────────────────

    def _handle_persona_switch(
        self, message: str, session: Session
    ) -> AgentResponse | None:
        """Handle ``@ingrid`` / ``@jonathan``; ``None`` if not a switch token."""
        target = next((p for p in Persona if p.switch_token == message), None)
        if target is None:
            return None

        if target is session.persona:
            logger.info("Persona %s already attributed, ignoring switch", target.value)
            return AgentResponse(session=session)

        if target is SECRETARY:
            return self._reply(
                session, STAGE_SECRETARY, messages.SECRETARY_TAKEOVER, SECRETARY,
                attribute_to=SECRETARY,
            )
        return self._reply(
            session, STAGE_MENU, messages.ATTORNEY_TAKEOVER, ATTORNEY,
            attribute_to=ATTORNEY,
        )

    def _handle_menu_choice(self, message: str, session: Session) -> AgentResponse:
        if message == OPTION_CASE_STATUS:
            return self._reply(
                session, STAGE_CASE_LOOKUP, messages.CASE_LOOKUP_PROMPT, ATTORNEY
            )
        if message == OPTION_FEE:
            return self._reply(session, STAGE_MENU, messages.FEE_INFO, ATTORNEY)
        if message == OPTION_SCHEDULE:
            return self._reply(
                session, STAGE_SCHEDULING, messages.SCHEDULING_PROMPT, ATTORNEY
            )
        if message == OPTION_SECRETARY:
            return self._reply(
                session, STAGE_SECRETARY, messages.SECRETARY_GREETING, SECRETARY,
                attribute_to=SECRETARY,
            )
        return self._reply(session, STAGE_MENU, messages.INVALID_OPTION, speaker=None)

    @staticmethod
    def _reply(
        session: Session,
        stage: int,
        text: str,
        speaker: Persona | None,
        attribute_to: Persona | None = None,
    ) -> AgentResponse:
        return AgentResponse(
            session=session.with_stage(stage, attribute_to),
            reply_text=text,
            persona=speaker,
        )
