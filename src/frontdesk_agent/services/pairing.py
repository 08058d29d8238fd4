"""Pairing state — latest QR credential published by the WhatsApp Web bridge."""

from __future__ import annotations

import logging

import qrcode
from qrcode.image.svg import SvgPathImage

logger = logging.getLogger(__name__)


class PairingState:
    """Holds the one-time pairing credential until the device is linked."""

    def __init__(self) -> None:
        self._credential: str | None = None

    @property
    def credential(self) -> str | None:
        return self._credential

    def publish(self, credential: str) -> None:
        """Store a new credential; each one replaces the previous."""
        self._credential = credential
        logger.info("New pairing credential received")

    def clear(self) -> None:
        """Forget the credential (e.g. once the bridge reports it is linked)."""
        self._credential = None

    def render_svg(self) -> str | None:
        """Render the credential as an inline SVG QR code, or ``None``."""
        if self._credential is None:
            return None
        image = qrcode.make(self._credential, image_factory=SvgPathImage)
        return image.to_string(encoding="unicode")
