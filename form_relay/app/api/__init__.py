"""
API package.

``router`` aggregates the endpoint modules under ``/api``.
"""
