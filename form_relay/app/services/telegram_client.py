"""
Minimal asynchronous client for the Telegram Bot API.

Only ``sendMessage`` is needed by the relay.  Every call is a single
attempt: there are no retries and no backoff, and a timeout is always
applied so a hung upstream cannot hold a request open forever.  Any
failure is reported as :class:`RelayFailed`, whose message carries the
upstream detail for the server log.
"""

import logging
from typing import Any, Dict, Optional

import httpx


logger = logging.getLogger(__name__)


class RelayFailed(Exception):
    """The Bot API call failed or reported an error."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class TelegramClient:
    """Send messages through the Telegram Bot API."""

    def __init__(
        self,
        bot_token: str,
        *,
        api_url: str = "https://api.telegram.org",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialise the client.

        Args:
            bot_token: Token issued by BotFather.
            api_url: Base URL of the Bot API.
            timeout: Timeout in seconds applied to each call.
            transport: Optional httpx transport, used by tests to stub
                out the network.
        """
        self._base_url = f"{api_url.rstrip('/')}/bot{bot_token}"
        self.timeout = timeout
        self._transport = transport

    async def send_message(
        self, chat_id: str, text: str, *, parse_mode: Optional[str] = None
    ) -> Dict[str, Any]:
        """Send ``text`` to ``chat_id`` and return the decoded API response."""
        payload: Dict[str, Any] = {"chat_id": chat_id, "text": text}
        if parse_mode:
            payload["parse_mode"] = parse_mode
        return await self._request("sendMessage", payload)

    async def _request(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        url = f"{self._base_url}/{method}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=payload)
        except httpx.TimeoutException as exc:
            raise RelayFailed(f"{method} timed out after {self.timeout}s: {exc!r}") from exc
        except httpx.HTTPError as exc:
            raise RelayFailed(f"{method} request failed: {exc!r}") from exc

        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = None

        if not response.is_success:
            description = (data or {}).get("description") or response.text
            raise RelayFailed(
                f"{method} returned HTTP {response.status_code}: {description}",
                status_code=response.status_code,
            )
        if data is not None and data.get("ok") is False:
            raise RelayFailed(
                f"{method} rejected: {data.get('description')}",
                status_code=response.status_code,
            )
        logger.debug("Telegram %s succeeded", method)
        return data or {}
