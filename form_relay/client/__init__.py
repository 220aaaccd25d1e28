"""
Client side of the relay: the contact form logic.

The browser page in ``form_relay/public`` and :class:`FormController`
follow the same state machine.  The controller holds an explicit
:class:`OutcomeState` and everything shown to the visitor is derived
from it by :func:`render`.
"""

from .form import ClickTarget, FormController, ServiceMenu, ServiceOption
from .state import Outcome, OutcomeState, StatusView, render

__all__ = [
    "ClickTarget",
    "FormController",
    "Outcome",
    "OutcomeState",
    "ServiceMenu",
    "ServiceOption",
    "StatusView",
    "render",
]
