"""
Pydantic schema definitions for API payloads.

Only the relay endpoint exists, so all of its request and response
bodies live in ``submission``.
"""
