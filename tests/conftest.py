"""Pytest configuration and shared fixtures."""

import json
from typing import Any, Dict, List, Optional

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from form_relay.app.api.endpoints.send import get_relay_service
from form_relay.app.core.config import Settings
from form_relay.app.main import create_app
from form_relay.app.services.relay_service import RelayService
from form_relay.app.services.telegram_client import TelegramClient


BOT_TOKEN = "123456:TEST-TOKEN"
CHAT_ID = "987654321"
TELEGRAM_API_URL = "https://telegram.test"


class TelegramStub:
    """Stands in for the Bot API and records every call made to it."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.status_code = 200
        self.body: Any = {"ok": True, "result": {"message_id": 1}}
        self.error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json=self.body)

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        bot_token=BOT_TOKEN,
        chat_id=CHAT_ID,
        port=3000,
        telegram_api_url=TELEGRAM_API_URL,
        relay_timeout=5.0,
        log_file="",
    )


@pytest.fixture
def telegram() -> TelegramStub:
    return TelegramStub()


@pytest.fixture
def app(settings: Settings, telegram: TelegramStub) -> FastAPI:
    """Relay app whose Telegram calls go to the stub."""
    application = create_app(settings)

    def relay_service() -> RelayService:
        client = TelegramClient(
            settings.bot_token,
            api_url=settings.telegram_api_url,
            timeout=settings.relay_timeout,
            transport=httpx.MockTransport(telegram.handler),
        )
        return RelayService(client, chat_id=settings.chat_id)

    application.dependency_overrides[get_relay_service] = relay_service
    return application


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app)
