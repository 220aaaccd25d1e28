"""
Tests for the client side form controller.

The happy path and relay errors run against the real application via
``httpx.ASGITransport``; network failures use a mock transport.
"""

import json

import httpx
import pytest

from form_relay.client import (
    ClickTarget,
    FormController,
    Outcome,
    OutcomeState,
    ServiceMenu,
    ServiceOption,
    render,
)
from form_relay.client.state import (
    GENERIC_ERROR_MESSAGE,
    SENDING_LABEL,
    SUBMIT_LABEL,
    SUCCESS_MESSAGE,
)


OPTIONS = [("Haircut", "Стрижка"), ("Coloring", "Окрашивание"), ("Styling", "Укладка")]


def asgi_client(app) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver")


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://testserver")


def filled(controller: FormController, *services: str) -> FormController:
    controller.name = "  Ann "
    controller.contact = " ann@x.com"
    for value in services:
        controller.menu.set_checked(value)
    return controller


# ----------------------------------------------------------------------
# Dropdown
# ----------------------------------------------------------------------
def test_toggle_menu_flips_visibility():
    menu = ServiceMenu()

    menu.toggle()
    assert menu.is_open
    menu.toggle()
    assert not menu.is_open


def test_click_outside_dropdown_closes_menu():
    menu = ServiceMenu(is_open=True)

    menu.handle_document_click(ClickTarget(("submit-btn", "contact-form", "card")))

    assert not menu.is_open


def test_click_inside_dropdown_keeps_menu_open():
    menu = ServiceMenu(is_open=True)

    menu.handle_document_click(ClickTarget(("option", "dropdown-menu", "dropdown", "card")))

    assert menu.is_open


def test_collect_selected_services_in_document_order():
    controller = FormController.from_options(None, OPTIONS)
    controller.menu.set_checked("Styling")
    controller.menu.set_checked("Haircut")

    assert controller.collect_selected_services() == ["Haircut", "Styling"]


def test_collect_selected_services_empty_when_nothing_checked():
    controller = FormController.from_options(None, ["a", "b"])

    assert controller.collect_selected_services() == []


def test_set_checked_unknown_value():
    menu = ServiceMenu(options=[ServiceOption("a")])

    with pytest.raises(KeyError):
        menu.set_checked("b")


# ----------------------------------------------------------------------
# Presentation
# ----------------------------------------------------------------------
def test_render_projection():
    assert render(OutcomeState.idle()) == render(OutcomeState())
    submitting = render(OutcomeState.submitting())
    assert (submitting.button_disabled, submitting.button_label, submitting.text) == (True, SENDING_LABEL, "")
    success = render(OutcomeState.success())
    assert (success.text, success.css_class, success.button_disabled) == (SUCCESS_MESSAGE, "status success", False)
    error = render(OutcomeState.transport_error("boom"))
    assert (error.text, error.css_class, error.button_label) == ("boom", "status error", SUBMIT_LABEL)


# ----------------------------------------------------------------------
# Submission
# ----------------------------------------------------------------------
@pytest.mark.asyncio
async def test_submit_success_resets_form(app, telegram):
    async with asgi_client(app) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Haircut")
        state = await controller.submit()

    assert state.outcome is Outcome.SUCCESS
    assert controller.render().text == SUCCESS_MESSAGE
    assert (controller.name, controller.contact) == ("", "")
    assert controller.collect_selected_services() == []
    assert not controller.render().button_disabled
    assert telegram.payloads[0]["text"].split("\n")[2:4] == ["👤 Имя: Ann", "📱 Контакт: ann@x.com"]


@pytest.mark.asyncio
async def test_submit_without_services_makes_no_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"success": True})

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS))
        state = await controller.submit()

    assert state == OutcomeState.validation_error("Выберите хотя бы одну услугу")
    assert controller.render().css_class == "status error"
    assert calls == []


@pytest.mark.asyncio
async def test_submit_with_blank_name_makes_no_request():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json={"success": True})

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Haircut")
        controller.name = "   "
        state = await controller.submit()

    assert state.outcome is Outcome.VALIDATION_ERROR
    assert calls == []


@pytest.mark.asyncio
async def test_relay_failure_shows_server_message(app, telegram):
    telegram.status_code = 403
    telegram.body = {"ok": False, "description": "Forbidden"}

    async with asgi_client(app) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Haircut")
        state = await controller.submit()

    assert state == OutcomeState.transport_error("Не удалось отправить сообщение")
    view = controller.render()
    assert view.text == "Не удалось отправить сообщение"
    assert not view.button_disabled
    assert view.button_label == SUBMIT_LABEL
    # Fields are kept so the visitor can retry.
    assert controller.collect_selected_services() == ["Haircut"]


@pytest.mark.asyncio
async def test_error_without_message_falls_back_to_generic():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Haircut")
        state = await controller.submit()

    assert state == OutcomeState.transport_error(GENERIC_ERROR_MESSAGE)


@pytest.mark.asyncio
async def test_network_failure_shows_description():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Failed to fetch", request=request)

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Haircut")
        state = await controller.submit()

    assert state == OutcomeState.transport_error("Failed to fetch")
    assert not controller.render().button_disabled


@pytest.mark.asyncio
async def test_button_disabled_while_request_in_flight():
    seen = []
    controller = None

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(controller.render())
        return httpx.Response(200, json={"success": True})

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Coloring")
        await controller.submit()

    assert seen[0].button_disabled
    assert seen[0].button_label == SENDING_LABEL
    assert seen[0].text == ""
    assert not controller.render().button_disabled


@pytest.mark.asyncio
async def test_unexpected_error_still_releases_button():
    def handler(request: httpx.Request) -> httpx.Response:
        raise RuntimeError("bug")

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Haircut")
        with pytest.raises(RuntimeError):
            await controller.submit()

    assert controller.state == OutcomeState.idle()
    assert not controller.render().button_disabled
    assert controller.render().button_label == SUBMIT_LABEL


@pytest.mark.asyncio
async def test_posts_trimmed_json_body():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json={"success": True})

    async with mock_client(handler) as http:
        controller = filled(FormController.from_options(http, OPTIONS), "Styling", "Haircut")
        await controller.submit()

    assert requests[0].method == "POST"
    assert requests[0].url.path == "/api/send"
    assert json.loads(requests[0].content) == {
        "name": "Ann",
        "contact": "ann@x.com",
        "services": ["Haircut", "Styling"],
    }
