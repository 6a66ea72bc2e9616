"""Unlock cookie granted after a token is redeemed."""

from __future__ import annotations

from typing import Any, Dict, Mapping

UNLOCK_COOKIE_NAME = "unlocked"
UNLOCK_COOKIE_VALUE = "true"
UNLOCK_COOKIE_MAX_AGE = 365 * 24 * 60 * 60  # one year


def is_unlocked(cookies: Mapping[str, str]) -> bool:
    """True if the request carries the unlock cookie."""
    return cookies.get(UNLOCK_COOKIE_NAME) == UNLOCK_COOKIE_VALUE


def unlock_cookie_kwargs(secure: bool = True) -> Dict[str, Any]:
    """Keyword arguments for ``Response.set_cookie`` granting access."""
    return {
        "key": UNLOCK_COOKIE_NAME,
        "value": UNLOCK_COOKIE_VALUE,
        "max_age": UNLOCK_COOKIE_MAX_AGE,
        "path": "/",
        "samesite": "Lax",
        "httponly": True,
        "secure": secure,
    }
