"""
Contact form controller.

:class:`FormController` mirrors the behaviour of the page script: a
dropdown of service checkboxes that closes on any click outside it,
and an asynchronous submit that posts ``{name, contact, services}``
to the relay and maps the result onto an :class:`OutcomeState`.

The controller talks to the relay through an ``httpx.AsyncClient``
whose ``base_url`` points at the server, so it can be driven against a
live relay or, in tests, against the ASGI app directly.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, Union

import httpx

from .state import (
    GENERIC_ERROR_MESSAGE,
    NO_SERVICES_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    Outcome,
    OutcomeState,
    StatusView,
    render,
)


logger = logging.getLogger(__name__)

DROPDOWN_REGION = "dropdown"
SEND_ENDPOINT = "/api/send"


@dataclass
class ServiceOption:
    """One checkbox in the services dropdown."""

    value: str
    label: str = ""
    checked: bool = False


@dataclass(frozen=True)
class ClickTarget:
    """The element a click landed on.

    ``regions`` lists the regions (CSS classes) of the element and its
    ancestors, innermost first, the way ``Element.closest`` walks them.
    """

    regions: Tuple[str, ...] = ()

    def is_inside(self, region: str) -> bool:
        return region in self.regions


@dataclass
class ServiceMenu:
    """Toggleable multi-select panel of services."""

    options: List[ServiceOption] = field(default_factory=list)
    is_open: bool = False
    region: str = DROPDOWN_REGION

    def toggle(self) -> None:
        self.is_open = not self.is_open

    def close(self) -> None:
        self.is_open = False

    def handle_document_click(self, target: ClickTarget) -> None:
        """Close the panel when the click happened outside the dropdown."""
        if not target.is_inside(self.region):
            self.close()

    def set_checked(self, value: str, checked: bool = True) -> None:
        """Check or uncheck every option with ``value``.

        Raises ``KeyError`` if no option has that value.
        """
        matched = False
        for option in self.options:
            if option.value == value:
                option.checked = checked
                matched = True
        if not matched:
            raise KeyError(value)

    def selected(self) -> List[str]:
        return [option.value for option in self.options if option.checked]

    def clear(self) -> None:
        for option in self.options:
            option.checked = False


class FormController:
    """State and behaviour of the contact form."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        menu: Optional[ServiceMenu] = None,
        *,
        endpoint: str = SEND_ENDPOINT,
    ) -> None:
        self.client = client
        self.menu = menu or ServiceMenu()
        self.endpoint = endpoint
        self.name = ""
        self.contact = ""
        self.state = OutcomeState.idle()

    @classmethod
    def from_options(
        cls,
        client: httpx.AsyncClient,
        options: Iterable[Union[str, Tuple[str, str]]],
        **kwargs: Any,
    ) -> "FormController":
        """Build a controller whose dropdown lists ``options`` in order.

        Each option is either a value or a ``(value, label)`` pair.
        """
        menu_options: List[ServiceOption] = []
        for option in options:
            if isinstance(option, tuple):
                value, label = option
            else:
                value, label = option, option
            menu_options.append(ServiceOption(value=value, label=label))
        return cls(client, ServiceMenu(options=menu_options), **kwargs)

    # ------------------------------------------------------------------
    # Dropdown
    # ------------------------------------------------------------------
    def toggle_menu(self) -> None:
        self.menu.toggle()

    def on_document_click(self, target: ClickTarget) -> None:
        self.menu.handle_document_click(target)

    def collect_selected_services(self) -> List[str]:
        """Values of the checked services, in the order they are listed."""
        return self.menu.selected()

    # ------------------------------------------------------------------
    # Submission
    # ------------------------------------------------------------------
    def render(self) -> StatusView:
        return render(self.state)

    def reset(self) -> None:
        """Clear the text fields and uncheck every service."""
        self.name = ""
        self.contact = ""
        self.menu.clear()

    @contextmanager
    def _submission_in_progress(self) -> Iterator[None]:
        self.state = OutcomeState.submitting()
        try:
            yield
        finally:
            # Release the submit button even if no outcome was recorded.
            if self.state.outcome is Outcome.SUBMITTING:
                self.state = OutcomeState.idle()

    async def submit(self) -> OutcomeState:
        """Validate the form, post it to the relay and record the outcome.

        Validation failures and transport failures end up in
        :attr:`state` and are not raised.  Any other exception
        propagates after the submit button has been released.
        """
        name = self.name.strip()
        contact = self.contact.strip()
        if not name or not contact:
            self.state = OutcomeState.validation_error(REQUIRED_FIELDS_MESSAGE)
            return self.state

        services = self.collect_selected_services()
        if not services:
            self.state = OutcomeState.validation_error(NO_SERVICES_MESSAGE)
            return self.state

        with self._submission_in_progress():
            try:
                response = await self.client.post(
                    self.endpoint,
                    json={"name": name, "contact": contact, "services": services},
                )
            except httpx.HTTPError as exc:
                logger.warning("Submission failed to reach the relay: %r", exc)
                self.state = OutcomeState.transport_error(str(exc) or type(exc).__name__)
                return self.state

            data = _json_body(response)
            if response.is_success:
                self.state = OutcomeState.success()
                self.reset()
            else:
                message = data.get("error") or GENERIC_ERROR_MESSAGE
                self.state = OutcomeState.transport_error(str(message))
        return self.state


def _json_body(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
