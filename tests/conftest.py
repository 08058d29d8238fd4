"""Shared fixtures: a session store on a temp file and a recording sender."""

from __future__ import annotations

import asyncio

import pytest

from frontdesk_agent.services.message_router import MessageRouter
from frontdesk_agent.services.session_store import SessionStore

CHAT = "5511999999999@c.us"


class RecordingSender:
    """Stands in for the WhatsApp client; remembers every message sent."""

    def __init__(self, ok: bool = True, delay: float = 0.0) -> None:
        self.ok = ok
        self.delay = delay
        self.sent: list[tuple[str, str]] = []

    async def send_text(self, conversation_id: str, text: str) -> bool:
        if self.delay:
            await asyncio.sleep(self.delay)
        self.sent.append((conversation_id, text))
        return self.ok

    def texts(self, conversation_id: str = CHAT) -> list[str]:
        return [text for cid, text in self.sent if cid == conversation_id]


@pytest.fixture
def store(tmp_path) -> SessionStore:
    return SessionStore(tmp_path / "sessions.json")


@pytest.fixture
def sender() -> RecordingSender:
    return RecordingSender()


@pytest.fixture
def router(store, sender) -> MessageRouter:
    return MessageRouter(store, sender)
