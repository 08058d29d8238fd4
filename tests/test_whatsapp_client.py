"""Tests for the outbound WhatsAppClient and the PairingState."""

from __future__ import annotations

import json

import httpx
import pytest

from frontdesk_agent.services.pairing import PairingState
from frontdesk_agent.services.whatsapp_client import WhatsAppClient

CHAT = "5511999999999"


def _recording_transport(status: int = 200):
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(status, json={"ok": status == 200})

    return httpx.MockTransport(handler), requests


@pytest.mark.asyncio
async def test_sends_through_graph_api():
    transport, requests = _recording_transport()
    client = WhatsAppClient(
        api_token="token",
        phone_number_id="123",
        bridge_send_url="",
        api_version="v21.0",
        transport=transport,
    )

    assert await client.send_text(CHAT, "Olá") is True

    (request,) = requests
    assert str(request.url) == "https://graph.facebook.com/v21.0/123/messages"
    assert request.headers["Authorization"] == "Bearer token"
    assert json.loads(request.content) == {
        "messaging_product": "whatsapp",
        "to": CHAT,
        "type": "text",
        "text": {"body": "Olá"},
    }


@pytest.mark.asyncio
async def test_bridge_takes_precedence():
    transport, requests = _recording_transport()
    client = WhatsAppClient(
        api_token="token",
        bridge_send_url="http://bridge.local/send",
        bridge_token="s3cret",
        transport=transport,
    )

    assert await client.send_text(CHAT, "Olá") is True

    (request,) = requests
    assert str(request.url) == "http://bridge.local/send"
    assert request.headers["X-Bridge-Token"] == "s3cret"
    assert json.loads(request.content) == {"to": CHAT, "text": "Olá"}


@pytest.mark.asyncio
async def test_error_status_is_a_failure():
    transport, _ = _recording_transport(status=500)
    client = WhatsAppClient(api_token="token", bridge_send_url="", transport=transport)
    assert await client.send_text(CHAT, "Olá") is False


@pytest.mark.asyncio
async def test_network_error_is_a_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client = WhatsAppClient(
        api_token="token", bridge_send_url="", transport=httpx.MockTransport(handler)
    )
    assert await client.send_text(CHAT, "Olá") is False


@pytest.mark.asyncio
async def test_no_transport_logs_only():
    client = WhatsAppClient(api_token="", bridge_send_url="")
    assert await client.send_text(CHAT, "Olá") is True


def test_pairing_state():
    state = PairingState()
    assert state.render_svg() is None

    state.publish("2@abc,def,ghi")
    assert state.credential == "2@abc,def,ghi"
    assert "<svg" in state.render_svg()

    state.clear()
    assert state.credential is None
