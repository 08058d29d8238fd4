"""Message router — runs every inbound event through the front-desk pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections import Counter
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Protocol

from frontdesk_agent.agents import messages
from frontdesk_agent.agents.base import AgentResponse
from frontdesk_agent.agents.operator_agent import OperatorAgent
from frontdesk_agent.agents.reception_agent import ReceptionAgent
from frontdesk_agent.models.events import AuthorRole, InboundEvent, normalize_text
from frontdesk_agent.models.session import Session
from frontdesk_agent.services.business_hours import BusinessHoursGate, GateDecision
from frontdesk_agent.services.dedup import DedupFilter
from frontdesk_agent.services.session_store import SessionStore

logger = logging.getLogger(__name__)


class MessageSender(Protocol):
    async def send_text(self, conversation_id: str, text: str) -> bool: ...


class MessageRouter:
    """Central router that decides what happens to each inbound message.

    Pipeline
    --------
    * Group chats and the status broadcast are dropped.
    * Redelivered message ids are dropped (``DedupFilter``).
    * Operator-authored messages go to ``OperatorAgent``.
    * Customer messages pass the business-hours gate, when one is
      configured, and then go to ``ReceptionAgent``.
    * The resulting reply is sent and the new session stored.

    Events for the same conversation are handled one at a time; different
    conversations never wait on each other.  Idle conversation locks are
    dropped, and a conversation's closed-office mark is cleared when its
    session ends.
    """

    def __init__(
        self,
        store: SessionStore,
        sender: MessageSender,
        dedup: DedupFilter | None = None,
        gate: BusinessHoursGate | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._sender = sender
        self._dedup = dedup or DedupFilter()
        self._gate = gate
        self._clock = clock or (gate.now if gate else datetime.now)
        self._reception = ReceptionAgent()
        self._operator = OperatorAgent()
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: Counter[str] = Counter()

    async def route(self, event: InboundEvent) -> AgentResponse | None:
        """Handle one inbound event and return what was done, if anything.

        Never raises: a failure is logged and affects only this message.
        """
        conversation_id = event.conversation_id
        if not event.is_direct:
            logger.debug("Ignoring non-direct chat %s", conversation_id)
            return None

        if event.message_id and self._dedup.seen(event.message_id):
            return None

        text = normalize_text(event.body)
        async with self._conversation_lock(conversation_id):
            try:
                if event.author_role is AuthorRole.OPERATOR:
                    return await self._route_operator(conversation_id, text)
                return await self._route_customer(conversation_id, text)
            except Exception:
                logger.exception("Failed to handle message for %s", conversation_id)
                return None

    # ── Private helpers ──────────────────────────────────

    @asynccontextmanager
    async def _conversation_lock(self, conversation_id: str) -> AsyncIterator[None]:
        """Hold the conversation's lock; the lock is dropped once nobody waits on it."""
        lock = self._locks.get(conversation_id)
        if lock is None:
            lock = self._locks[conversation_id] = asyncio.Lock()
        self._lock_users[conversation_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._lock_users[conversation_id] -= 1
            if not self._lock_users[conversation_id]:
                del self._lock_users[conversation_id]
                del self._locks[conversation_id]

    async def _route_operator(
        self, conversation_id: str, text: str
    ) -> AgentResponse:
        session = self._store.get(conversation_id)
        logger.info(
            "[operator] Message to %s, session: %s",
            conversation_id,
            _describe(session),
        )
        response = await self._operator.handle(text, session)
        self._commit(conversation_id, session, response)
        return response

    async def _route_customer(
        self, conversation_id: str, text: str
    ) -> AgentResponse | None:
        session = self._store.get(conversation_id)
        logger.info(
            "[customer] Message from %s, session: %s",
            conversation_id,
            _describe(session),
        )

        if self._gate is not None and (session is None or not session.is_manual):
            decision = self._gate.check(conversation_id, self._clock())
            if decision is GateDecision.SUPPRESS:
                logger.info("Office closed, %s already notified", conversation_id)
                return None
            if decision is GateDecision.NOTIFY:
                return await self._send_closed_notice(conversation_id, session)

        agent = self._reception
        logger.debug("Routing %s → %s", conversation_id, agent.name)
        response = await agent.handle(text, session)

        if response.end_conversation:
            # Ending always sticks, even when the goodbye cannot be delivered.
            self._commit(conversation_id, session, response)
            await self._send(conversation_id, response.reply_text)
            return response

        if response.reply_text is None:
            self._commit(conversation_id, session, response)
            return response

        if not await self._send(conversation_id, response.reply_text):
            if session is None:
                logger.warning(
                    "Welcome to %s not delivered, leaving conversation unengaged",
                    conversation_id,
                )
            return None

        self._commit(conversation_id, session, response)
        return response

    async def _send_closed_notice(
        self, conversation_id: str, session: Session | None
    ) -> AgentResponse | None:
        notice = messages.unavailable_notice(self._gate.describe())
        if not await self._send(conversation_id, notice):
            self._gate.forget(conversation_id)
            return None
        return AgentResponse(session=session, reply_text=notice)

    async def _send(self, conversation_id: str, text: str | None) -> bool:
        if text is None:
            return True
        try:
            return await self._sender.send_text(conversation_id, text)
        except Exception:
            logger.exception("Sending reply to %s raised", conversation_id)
            return False

    def _commit(
        self,
        conversation_id: str,
        current: Session | None,
        response: AgentResponse,
    ) -> None:
        """Apply the agent's transition to the store, if anything changed."""
        if response.end_conversation:
            self._store.remove(conversation_id)
            if self._gate is not None:
                self._gate.forget(conversation_id)
            logger.info("Conversation %s ended, session removed", conversation_id)
            return

        if response.session is None or response.session == current:
            return

        self._store.put(conversation_id, response.session)
        logger.info(
            "Session for %s: %s → %s",
            conversation_id,
            _describe(current),
            _describe(response.session),
        )


def _describe(session: Session | None) -> str:
    if session is None:
        return "none"
    if session.is_manual:
        return "manual"
    return f"automated/stage {session.stage}/{session.persona.value}"
