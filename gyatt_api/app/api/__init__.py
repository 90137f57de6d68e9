"""
API package containing the HTTP routes.

``router.py`` aggregates the domain routers from ``endpoints``; the
application mounts the result under ``/api``.
"""
