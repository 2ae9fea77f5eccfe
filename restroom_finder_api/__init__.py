"""
Top-level package for the Restroom Finder API.

All functionality lives in the ``app`` subpackage; import the ASGI
application as ``restroom_finder_api.app.main:app``.
"""

__all__ = []
