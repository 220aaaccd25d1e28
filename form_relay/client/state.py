"""
Submission outcome state and its presentation.

``OutcomeState`` is an immutable value; the controller replaces it on
every transition.  ``render`` is a pure function from a state to the
text, CSS class and submit button appearance shown on the page.
"""

from dataclasses import dataclass
from enum import Enum


SUBMIT_LABEL = "Отправить заявку"
SENDING_LABEL = "Отправка..."
SUCCESS_MESSAGE = "Заявка отправлена! Я свяжусь с вами."
NO_SERVICES_MESSAGE = "Выберите хотя бы одну услугу"
REQUIRED_FIELDS_MESSAGE = "Заполните имя и контакт"
GENERIC_ERROR_MESSAGE = "Ошибка"


class Outcome(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    VALIDATION_ERROR = "validation_error"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class OutcomeState:
    """Where the form is in its submission lifecycle."""

    outcome: Outcome = Outcome.IDLE
    message: str = ""

    @classmethod
    def idle(cls) -> "OutcomeState":
        return cls(Outcome.IDLE)

    @classmethod
    def submitting(cls) -> "OutcomeState":
        return cls(Outcome.SUBMITTING)

    @classmethod
    def success(cls) -> "OutcomeState":
        return cls(Outcome.SUCCESS, SUCCESS_MESSAGE)

    @classmethod
    def validation_error(cls, message: str) -> "OutcomeState":
        return cls(Outcome.VALIDATION_ERROR, message)

    @classmethod
    def transport_error(cls, message: str) -> "OutcomeState":
        return cls(Outcome.TRANSPORT_ERROR, message)

    @property
    def is_error(self) -> bool:
        return self.outcome in (Outcome.VALIDATION_ERROR, Outcome.TRANSPORT_ERROR)


@dataclass(frozen=True)
class StatusView:
    """What the page shows for a given state."""

    text: str
    css_class: str
    button_disabled: bool
    button_label: str


def render(state: OutcomeState) -> StatusView:
    """Project an outcome state onto the status line and submit button."""
    if state.outcome is Outcome.SUBMITTING:
        return StatusView("", "status", True, SENDING_LABEL)
    if state.outcome is Outcome.SUCCESS:
        return StatusView(state.message, "status success", False, SUBMIT_LABEL)
    if state.is_error:
        return StatusView(state.message, "status error", False, SUBMIT_LABEL)
    return StatusView("", "status", False, SUBMIT_LABEL)
