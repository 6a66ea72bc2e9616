"""
Module: access

Purpose:
    Access gate for the generator: one-time unlock tokens redeemed for a
    long-lived session cookie.

Key Classes:
    - TokenStore: JSON-file token store with at-most-once redemption
    - RedeemOutcome: Redemption result

Dependencies:
    - portalocker: Cross-process file locking
"""

from .tokens import TokenStore, TokenStoreError, RedeemOutcome
from .session import is_unlocked, unlock_cookie_kwargs, UNLOCK_COOKIE_NAME, UNLOCK_COOKIE_MAX_AGE

__all__ = [
    "TokenStore",
    "TokenStoreError",
    "RedeemOutcome",
    "is_unlocked",
    "unlock_cookie_kwargs",
    "UNLOCK_COOKIE_NAME",
    "UNLOCK_COOKIE_MAX_AGE",
]
