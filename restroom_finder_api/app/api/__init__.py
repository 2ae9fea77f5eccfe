"""
HTTP layer.

``router.py`` aggregates the domain routers defined in ``endpoints``;
the application factory mounts the result at the root.
"""
