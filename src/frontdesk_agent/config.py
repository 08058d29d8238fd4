"""Front Desk Agent — configuration loaded from environment."""

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application-wide settings, loaded from .env or environment variables."""

    # ── Session persistence ───────────────────────────────
    sessions_file: Path = Path("./sessions.json")

    # ── Duplicate delivery filter ─────────────────────────
    dedup_clear_interval_seconds: float = 60.0

    # ── Business hours (optional gate) ────────────────────
    business_hours_enabled: bool = False
    business_hours_timezone: str = "America/Sao_Paulo"
    business_hours_start: int = 9
    business_hours_end: int = 18
    business_days: list[int] = [0, 1, 2, 3, 4]  # Monday = 0

    # ── WhatsApp Business API ─────────────────────────────
    whatsapp_verify_token: str = "changeme"
    whatsapp_api_token: str = ""
    whatsapp_phone_number_id: str = ""
    whatsapp_api_version: str = "v21.0"

    # ── WhatsApp Web bridge ───────────────────────────────
    bridge_token: str = ""  # bridge routes answer 503 until this is set
    bridge_send_url: str = ""

    # ── Office ────────────────────────────────────────────
    office_name: str = "Jonathan Berleze Advocacia"

    # ── App ───────────────────────────────────────────────
    app_name: str = "Front Desk Agent"
    host: str = "0.0.0.0"
    port: int = 5002
    debug: bool = True

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


# Singleton settings instance
settings = Settings()
