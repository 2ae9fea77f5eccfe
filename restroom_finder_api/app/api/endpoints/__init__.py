"""
Endpoint modules.

Each module defines an ``APIRouter`` for one domain (reviews,
restrooms, users, purchases, address search).  Routers are aggregated
in ``api/router.py``.
"""
