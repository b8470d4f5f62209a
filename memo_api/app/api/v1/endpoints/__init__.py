"""
Endpoint subpackage for API v1.

Each module defines an APIRouter; the routers are aggregated in
``router.py`` and included in the main application.
"""
