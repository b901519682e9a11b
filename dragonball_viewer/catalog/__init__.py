"""
Catalog package for the Dragon Ball character viewer.

This package contains the schemas, the Dragon Ball API client, the
fallback-aware data access facade and the per-screen state controllers
that a front-end drives.  The route definitions expose the same data
over HTTP so that any client can page through characters, search them
and open a detail view, even when the public API is down.
"""

from .router import router as catalog_router  # noqa: F401
