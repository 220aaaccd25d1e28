"""
Endpoint subpackage.

Each module defines an APIRouter; they are aggregated in
``api/router.py`` and included in the main application.
"""
