"""Central error mapping for problem+json responses.

Single source of truth for mapping failure kinds to problem codes and HTTP
statuses. Handlers must import from here instead of hardcoding strings or
numbers.
"""

from __future__ import annotations

STORE_UNAVAILABLE = {
    "code": "STORE_UNAVAILABLE",
    "status": 503,
    "title": "Service Unavailable",
}

STORE_TIMEOUT = {
    "code": "STORE_TIMEOUT",
    "status": 504,
    "title": "Gateway Timeout",
}

REQUEST_BODY_INVALID = {
    "code": "REQUEST_BODY_INVALID",
    "status": 422,
    "title": "Invalid Request",
}

INTERNAL_ERROR = {
    "code": "INTERNAL_ERROR",
    "status": 500,
    "title": "Internal Server Error",
}

__all__ = [
    "STORE_UNAVAILABLE",
    "STORE_TIMEOUT",
    "REQUEST_BODY_INVALID",
    "INTERNAL_ERROR",
]
