"""Pairing routes — show the WhatsApp Web QR code published by the bridge."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, Field

from frontdesk_agent.webhook.handler import pairing_state, require_bridge_token

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pairing"])

PLACEHOLDER = (
    "QR Code ainda não gerado. Aguarde a inicialização do bot e atualize a página."
)

_PAGE = """<html>
    <head>
        <title>QR Code WhatsApp</title>
        <style>
            body {{ display: flex; justify-content: center; align-items: center; height: 100vh; margin: 0; background-color: #f0f2f5; font-family: Arial, sans-serif; }}
            .container {{ text-align: center; padding: 40px; background-color: white; border-radius: 12px; box-shadow: 0 4px 12px rgba(0,0,0,0.1); }}
            h2 {{ color: #333; }}
            svg {{ margin-top: 20px; width: 280px; height: 280px; }}
        </style>
    </head>
    <body>
        <div class="container">
            <h2>Escaneie o QR Code para autenticar</h2>
            {qr}
        </div>
    </body>
</html>"""


class PairingRequest(BaseModel):
    credential: str = Field(..., min_length=1)


@router.get("/qrcode", response_model=None)
async def show_qrcode() -> HTMLResponse | PlainTextResponse:
    """Render the current pairing QR code, or a placeholder before there is one."""
    svg = pairing_state.render_svg()
    if svg is None:
        return PlainTextResponse(PLACEHOLDER)
    return HTMLResponse(_PAGE.format(qr=svg))


@router.post("/pairing", dependencies=[Depends(require_bridge_token)])
async def publish_pairing(body: PairingRequest) -> dict:
    """Called by the bridge whenever WhatsApp Web issues a new QR payload."""
    pairing_state.publish(body.credential)
    return {"status": "ok"}
