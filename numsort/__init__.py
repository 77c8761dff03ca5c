"""numsort: accept integers over HTTP, persist them, list them back sorted.

This package exposes a small FastAPI application factory. It wires only
cross-cutting middleware (request-id) and problem+json error handling, and
mounts the API routers. Business logic lives in `numsort/logic/` and route
handlers in `numsort/routes/`.
"""

from __future__ import annotations

from numsort.main import create_app

__all__ = ["create_app"]
