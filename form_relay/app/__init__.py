"""
Application package initializer.

The relay is small: a single endpoint under ``api/endpoints``, a
service layer that validates submissions and talks to Telegram, and
the ``core`` helpers for configuration and logging.
"""

from .main import app  # noqa: F401
