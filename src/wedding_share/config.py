"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-mini"
    public_base_url: str = "http://localhost:8000"
    event_id: str = "12345"
    blur_threshold: float = 100.0
    upload_delay_seconds: float = 2.0
    qr_size: int = 256
    qr_font_path: str | None = None
    qr_max_font_size: int = 48
    qr_min_font_size: int = 10
    camera_index_environment: int = 0
    camera_index_user: int = 1
    print_command: str = "lp"
    max_guest_sessions: int = 200
    seed_album: bool = True
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    def guest_url(self) -> str:
        """URL encoded into the event QR code."""
        return f"{self.public_base_url.rstrip('/')}?event={self.event_id}"
