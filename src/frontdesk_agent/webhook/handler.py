"""WhatsApp webhook handler — turns transport payloads into inbound events."""

from __future__ import annotations

import logging
import secrets

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, Response

from frontdesk_agent.config import settings
from frontdesk_agent.models.events import AuthorRole, InboundEvent
from frontdesk_agent.services.business_hours import BusinessHoursGate
from frontdesk_agent.services.dedup import DedupFilter
from frontdesk_agent.services.message_router import MessageRouter
from frontdesk_agent.services.pairing import PairingState
from frontdesk_agent.services.session_store import SessionStore
from frontdesk_agent.services.whatsapp_client import WhatsAppClient

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])

# ── Shared instances (created once, reused across requests) ──
session_store = SessionStore(settings.sessions_file)
dedup_filter = DedupFilter()
pairing_state = PairingState()
_gate = (
    BusinessHoursGate(
        start_hour=settings.business_hours_start,
        end_hour=settings.business_hours_end,
        weekdays=settings.business_days,
        timezone=settings.business_hours_timezone,
    )
    if settings.business_hours_enabled
    else None
)
_message_router = MessageRouter(
    session_store, WhatsAppClient(), dedup=dedup_filter, gate=_gate
)


def require_bridge_token(x_bridge_token: str | None = Header(None)) -> None:
    """Reject bridge calls that don't carry the configured shared token.

    With no ``BRIDGE_TOKEN`` configured the bridge routes are disabled.
    """
    if not settings.bridge_token:
        logger.warning("Bridge request rejected (BRIDGE_TOKEN not configured)")
        raise HTTPException(status_code=503, detail="Bridge not configured")
    if x_bridge_token is None or not secrets.compare_digest(
        x_bridge_token, settings.bridge_token
    ):
        logger.warning("Bridge request rejected (bad token)")
        raise HTTPException(status_code=401, detail="Invalid bridge token")


# ──────────────────────────────────────────────────────────────
# GET /webhook — Meta verification challenge
# ──────────────────────────────────────────────────────────────
@router.get("/webhook")
async def verify_webhook(
    hub_mode: str = Query(None, alias="hub.mode"),
    hub_verify_token: str = Query(None, alias="hub.verify_token"),
    hub_challenge: str = Query(None, alias="hub.challenge"),
) -> Response:
    """Respond to the Meta webhook verification challenge."""
    if hub_mode == "subscribe" and hub_verify_token == settings.whatsapp_verify_token:
        logger.info("Webhook verified successfully")
        return Response(content=hub_challenge, media_type="text/plain")
    logger.warning("Webhook verification failed (bad token or mode)")
    return Response(content="Forbidden", status_code=403)


# ──────────────────────────────────────────────────────────────
# POST /webhook — Incoming messages and business-app echoes
# ──────────────────────────────────────────────────────────────
@router.post("/webhook")
async def receive_message(request: Request) -> dict:
    """Process a WhatsApp Cloud API notification.

    Expected payload structure (simplified)::

        {
          "entry": [{
            "changes": [{
              "value": {
                "messages": [{
                  "id": "wamid.HBg...",
                  "from": "5511999999999",
                  "type": "text",
                  "text": { "body": "Oi" }
                }],
                "message_echoes": [{
                  "id": "wamid.HBh...",
                  "to": "5511999999999",
                  "type": "text",
                  "text": { "body": "Bom dia, aqui é o Jonathan" }
                }]
              }
            }]
          }]
        }

    ``messages`` are written by customers; ``message_echoes`` are what the
    office typed in the WhatsApp Business app and count as operator messages.
    """
    body = await request.json()

    for event in parse_cloud_api_payload(body):
        logger.info(
            "Message %s %s: %s",
            "to" if event.author_role is AuthorRole.OPERATOR else "from",
            event.conversation_id,
            event.body[:80],
        )
        await _message_router.route(event)

    return {"status": "ok"}


# ──────────────────────────────────────────────────────────────
# POST /events — Normalized events pushed by a WhatsApp Web bridge
# ──────────────────────────────────────────────────────────────
@router.post("/events", dependencies=[Depends(require_bridge_token)])
async def receive_bridge_event(event: InboundEvent) -> dict:
    """Process one event from the bridge (customer or operator authored)."""
    response = await _message_router.route(event)
    return {"status": "ok", "replied": bool(response and response.reply_text)}


def parse_cloud_api_payload(body: dict) -> list[InboundEvent]:
    """Extract text message events from a Cloud API notification body.

    Non-text messages and non-message notifications (statuses, etc.) are
    skipped.
    """
    events: list[InboundEvent] = []
    try:
        changes = [c for entry in body["entry"] for c in entry.get("changes", [])]
    except (KeyError, TypeError, AttributeError):
        logger.debug("Received non-message webhook event, ignoring")
        return events

    for change in changes:
        value = change.get("value", {})
        for msg in value.get("messages", []):
            event = _to_event(msg, msg.get("from", ""), AuthorRole.CUSTOMER)
            if event:
                events.append(event)
        for echo in value.get("message_echoes", []):
            event = _to_event(echo, echo.get("to", ""), AuthorRole.OPERATOR)
            if event:
                events.append(event)
    return events


def _to_event(msg: dict, conversation_id: str, role: AuthorRole) -> InboundEvent | None:
    text_body = msg.get("text", {}).get("body", "")
    if not conversation_id or not text_body or msg.get("type", "text") != "text":
        return None
    return InboundEvent(
        conversation_id=conversation_id,
        author_role=role,
        body=text_body,
        message_id=msg.get("id", ""),
        is_group="group_id" in msg,
    )
