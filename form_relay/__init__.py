"""
Top‑level package for the form relay.

The server side lives in ``form_relay.app`` (a FastAPI application
exposing ``POST /api/send``) and the client side form logic in
``form_relay.client``.  The static page served to browsers is shipped
in ``form_relay/public``.
"""

__all__ = []
