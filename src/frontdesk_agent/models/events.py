"""Inbound message event — the transport-neutral shape the router consumes."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field

GROUP_SUFFIX = "@g.us"
STATUS_BROADCAST = "status@broadcast"


class AuthorRole(str, Enum):
    CUSTOMER = "customer"
    OPERATOR = "operator"


class InboundEvent(BaseModel):
    """One chat message delivered by the transport.

    ``author_role`` is ``operator`` when the office account itself wrote the
    message (from the phone or the WhatsApp Business app).
    """

    conversation_id: str = Field(..., min_length=1)
    author_role: AuthorRole = AuthorRole.CUSTOMER
    body: str = ""
    message_id: str = ""
    is_group: bool = False

    @property
    def is_direct(self) -> bool:
        """``False`` for group chats and the status broadcast pseudo-chat."""
        return not self.is_group and is_direct_chat(self.conversation_id)


def is_direct_chat(conversation_id: str) -> bool:
    """Return ``True`` for a one-to-one chat address."""
    return not (
        conversation_id.endswith(GROUP_SUFFIX) or conversation_id == STATUS_BROADCAST
    )


def normalize_text(text: str) -> str:
    """Trim and case-fold a message body before keyword matching."""
    return text.strip().casefold()
