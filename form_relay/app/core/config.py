"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  ``run.py`` loads a ``.env`` file (if present)
before this module is imported, so values placed there are picked up
as well.  Three values are required to actually relay submissions:
``BOT_TOKEN``, ``CHAT_ID`` and ``PORT``.
"""

import os
from dataclasses import dataclass
from typing import List, Optional


def _optional_int(value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    return int(value)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Form Relay")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    log_file: str = os.getenv("LOG_FILE", "")

    # Credential issued by BotFather.  It is embedded in the Bot API URL,
    # so it must never be written to logs.
    bot_token: str = os.getenv("BOT_TOKEN", "")

    # Chat that receives the notifications (a user, group or channel id).
    chat_id: str = os.getenv("CHAT_ID", "")

    # Listen address.  Loopback by default: a reverse proxy is expected
    # in front of the relay for public exposure.
    host: str = os.getenv("HOST", "127.0.0.1")
    port: Optional[int] = _optional_int(os.getenv("PORT"))

    # Base URL of the Telegram Bot API.  Overridable for local stubs.
    telegram_api_url: str = os.getenv("TELEGRAM_API_URL", "https://api.telegram.org")

    # Timeout in seconds for the outbound sendMessage call.
    relay_timeout: float = float(os.getenv("RELAY_TIMEOUT", "10"))

    def missing_required(self) -> List[str]:
        """Return the names of required environment variables that are unset."""
        missing: List[str] = []
        if not self.bot_token:
            missing.append("BOT_TOKEN")
        if not self.chat_id:
            missing.append("CHAT_ID")
        if self.port is None:
            missing.append("PORT")
        return missing


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
