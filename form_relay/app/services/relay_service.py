"""
Service layer for relaying form submissions to Telegram.

``RelayService.parse_submission`` turns a raw JSON body into a
:class:`SubmissionRequest` or raises :class:`SubmissionInvalid`.
``build_message`` renders the notification text, and
``RelayService.relay`` forwards it with exactly one Bot API call.
Nothing is stored between requests.
"""

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from form_relay.app.schemas.submission import SubmissionRequest
from form_relay.app.services.telegram_client import TelegramClient


logger = logging.getLogger(__name__)

INVALID_SUBMISSION_MESSAGE = "Заполни все поля и выбери хотя бы одну услугу"
RELAY_FAILED_MESSAGE = "Не удалось отправить сообщение"

# Markup mode of the outgoing message.  The text itself is not escaped.
PARSE_MODE = "HTML"


class SubmissionInvalid(Exception):
    """A required field is missing, empty or of the wrong type."""


def build_message(submission: SubmissionRequest) -> str:
    """Render the notification text for a submission.

    The layout is fixed: header, blank line, name, contact, blank
    line, services header and one bullet per service in selection
    order.  The result depends only on the submission.
    """
    lines: List[str] = [
        "📩 Новая заявка с сайта!",
        "",
        f"👤 Имя: {submission.name}",
        f"📱 Контакт: {submission.contact}",
        "",
        "🔧 Услуги:",
    ]
    lines.extend(f"  • {service}" for service in submission.services)
    return "\n".join(lines)


class RelayService:
    """Validate submissions and forward them to a Telegram chat."""

    def __init__(self, client: TelegramClient, chat_id: str) -> None:
        self.client = client
        self.chat_id = chat_id

    @staticmethod
    def parse_submission(body: Dict[str, Any]) -> SubmissionRequest:
        """Validate a raw request body.

        Raises
        ------
        SubmissionInvalid
            If ``name`` or ``contact`` is empty or absent, or if
            ``services`` is absent, empty or not a list of strings.
        """
        try:
            return SubmissionRequest(
                name=body.get("name"),
                contact=body.get("contact"),
                services=body.get("services"),
            )
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            logger.info("Rejected submission, invalid fields: %s", ", ".join(fields))
            raise SubmissionInvalid(INVALID_SUBMISSION_MESSAGE) from exc

    async def relay(self, submission: SubmissionRequest) -> None:
        """Send the formatted submission to the configured chat.

        Raises :class:`~form_relay.app.services.telegram_client.RelayFailed`
        when the Bot API call does not succeed.
        """
        text = build_message(submission)
        await self.client.send_message(self.chat_id, text, parse_mode=PARSE_MODE)
        logger.info(
            "Relayed submission with %d service(s) to chat %s",
            len(submission.services),
            self.chat_id,
        )
