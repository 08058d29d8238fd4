"""Tests for the ReceptionAgent — the customer-facing scripted flow."""

from __future__ import annotations

import pytest

from frontdesk_agent.agents import messages
from frontdesk_agent.agents.reception_agent import ReceptionAgent
from frontdesk_agent.models.session import Mode, Persona, Session


@pytest.fixture
def agent() -> ReceptionAgent:
    return ReceptionAgent()


# ──────────────────────────────────────────────────────────
# First contact
# ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["oi", "1", "encerrar", "menu", "@ingrid"])
async def test_first_message_always_gets_welcome(agent, text):
    response = await agent.handle(text, None)

    assert response.reply_text == messages.WELCOME
    assert response.session == Session(mode=Mode.AUTOMATED, stage=1, persona=Persona.ATTORNEY)
    assert not response.end_conversation


# ──────────────────────────────────────────────────────────
# Manual conversations are never answered
# ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["oi", "1", "menu", "encerrar", "@ingrid"])
async def test_manual_session_is_left_alone(agent, text):
    session = Session.manual()
    response = await agent.handle(text, session)

    assert response.reply_text is None
    assert response.session == session
    assert not response.end_conversation


# ──────────────────────────────────────────────────────────
# Case lookup scenario
# ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_case_lookup_flow(agent):
    session = Session.start()

    response = await agent.handle("1", session)
    assert response.reply_text == messages.CASE_LOOKUP_PROMPT
    assert response.session.stage == 2

    response = await agent.handle("12345", response.session)
    assert response.reply_text == messages.CASE_LOOKUP_ACK
    assert response.reply_text.endswith(messages.FOOTER)
    assert response.session.stage == 1

    response = await agent.handle("encerrar", response.session)
    assert response.reply_text == messages.CLOSING
    assert response.end_conversation


@pytest.mark.asyncio
async def test_fee_info_stays_on_menu(agent):
    response = await agent.handle("2", Session.start())
    assert response.reply_text == messages.FEE_INFO
    assert response.session == Session.start()
    assert response.persona is Persona.ATTORNEY


@pytest.mark.asyncio
async def test_scheduling_flow(agent):
    response = await agent.handle("3", Session.start())
    assert response.reply_text == messages.SCHEDULING_PROMPT
    assert response.session.stage == 3

    response = await agent.handle("segunda de manhã", response.session)
    assert response.reply_text == messages.SCHEDULING_ACK
    assert response.session.stage == 1


@pytest.mark.asyncio
async def test_invalid_option_keeps_menu(agent):
    response = await agent.handle("7", Session.start())
    assert response.reply_text == messages.INVALID_OPTION
    assert response.reply_text.endswith(messages.FOOTER)
    assert response.session.stage == 1


@pytest.mark.asyncio
async def test_menu_resets_stage(agent):
    response = await agent.handle("menu", Session(stage=3))
    assert response.reply_text == messages.MENU
    assert response.session.stage == 1


# ──────────────────────────────────────────────────────────
# Persona handoff
# ──────────────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_secretary_and_back(agent):
    response = await agent.handle("4", Session.start())
    assert response.reply_text == messages.SECRETARY_GREETING
    assert response.session == Session(stage=4, persona=Persona.SECRETARY)

    response = await agent.handle("@jonathan", response.session)
    assert response.reply_text == messages.ATTORNEY_TAKEOVER
    assert response.session == Session(stage=1, persona=Persona.ATTORNEY)


@pytest.mark.asyncio
async def test_switch_to_secretary_by_token(agent):
    response = await agent.handle("@ingrid", Session(stage=2))
    assert response.reply_text == messages.SECRETARY_TAKEOVER
    assert response.session == Session(stage=4, persona=Persona.SECRETARY)


@pytest.mark.asyncio
async def test_switch_to_current_persona_is_a_no_op(agent):
    session = Session(stage=4, persona=Persona.SECRETARY)
    response = await agent.handle("@ingrid", session)
    assert response.reply_text is None
    assert response.session == session

    session = Session(stage=2)
    response = await agent.handle("@jonathan", session)
    assert response.reply_text is None
    assert response.session == session


@pytest.mark.asyncio
async def test_secretary_stage_returns_to_menu_keeping_persona(agent):
    response = await agent.handle("preciso de ajuda", Session(stage=4, persona=Persona.SECRETARY))
    assert response.reply_text == messages.SECRETARY_ACK
    assert response.session == Session(stage=1, persona=Persona.SECRETARY)
    assert response.persona is Persona.SECRETARY


@pytest.mark.asyncio
async def test_agent_does_not_mutate_input(agent):
    session = Session.start()
    await agent.handle("1", session)
    assert session == Session.start()
