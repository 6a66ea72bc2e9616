"""
Module: access.tokens

Purpose:
    One-time unlock tokens stored in a JSON file.
    Each token is created unused at provisioning time and can be redeemed
    at most once; redemption is a compare-and-set on its ``used`` flag
    performed under an exclusive file lock.

Key Classes:
    - TokenStore: Provision, redeem and count tokens
    - RedeemOutcome: Result of a redemption attempt

Dependencies:
    - portalocker (via access.file_locking)

Used By:
    - web.app: /api/unlock
    - cli: tokens commands
"""

from __future__ import annotations

import json
import logging
import secrets
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from .file_locking import locked_file, locked_read_modify_write_json

logger = logging.getLogger(__name__)

DEFAULT_TOKEN_COUNT = 100
TOKEN_BYTES = 16


class TokenStoreError(Exception):
    """Token file exists but cannot be read as a token list."""
    pass


class RedeemOutcome(str, Enum):
    """Result of redeeming a token. Values double as client error codes."""
    REDEEMED = "redeemed"
    MISSING_TOKEN = "missing_token"
    INVALID_OR_USED = "invalid_or_used"
    STORE_MISSING = "system_error"


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class TokenStore:
    """
    JSON-file token store.

    File format is a list of records:
    ``{"token": "<hex>", "used": false, "createdAt": "...", "usedAt": "..."}``

    Example:
        >>> store = TokenStore(Path("tokens.json"))
        >>> tokens = store.provision(10)
        >>> store.redeem(tokens[0])
        <RedeemOutcome.REDEEMED: 'redeemed'>
        >>> store.redeem(tokens[0])
        <RedeemOutcome.INVALID_OR_USED: 'invalid_or_used'>
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def provision(self, count: int = DEFAULT_TOKEN_COUNT) -> List[str]:
        """
        Write ``count`` fresh unused tokens, replacing any existing file.

        Returns:
            The new token strings
        """
        if count <= 0:
            raise ValueError(f"count must be positive: {count}")

        created_at = _now()
        records = [
            {"token": secrets.token_hex(TOKEN_BYTES), "used": False, "createdAt": created_at}
            for _ in range(count)
        ]
        locked_read_modify_write_json(self.path, lambda _existing: records, default=list)
        logger.info(f"Provisioned {count} tokens in {self.path}")
        return [r["token"] for r in records]

    def redeem(self, token: str) -> RedeemOutcome:
        """
        Mark ``token`` used if it exists and is unused.

        Concurrent calls for the same token succeed at most once.

        Raises:
            TokenStoreError: If the token file is corrupt
        """
        if not token:
            return RedeemOutcome.MISSING_TOKEN
        if not self.path.exists():
            logger.error(f"Token store not found: {self.path}")
            return RedeemOutcome.STORE_MISSING

        outcome = [RedeemOutcome.INVALID_OR_USED]

        def _mark_used(records: Any) -> Any:
            _check_records(records, self.path)
            for record in records:
                if record.get("token") == token and not record.get("used"):
                    record["used"] = True
                    record["usedAt"] = _now()
                    outcome[0] = RedeemOutcome.REDEEMED
                    break
            return records

        try:
            locked_read_modify_write_json(self.path, _mark_used, default=list, create=False)
        except FileNotFoundError:
            logger.error(f"Token store disappeared: {self.path}")
            return RedeemOutcome.STORE_MISSING
        except json.JSONDecodeError as e:
            raise TokenStoreError(f"Token store {self.path} is not valid JSON: {e}") from e

        if outcome[0] is RedeemOutcome.REDEEMED:
            logger.info("Token redeemed")
        else:
            logger.info("Rejected invalid or already used token")
        return outcome[0]

    def stats(self) -> Dict[str, int]:
        """Counts of total, used and unused tokens."""
        if not self.path.exists():
            return {"total": 0, "used": 0, "unused": 0}

        with locked_file(self.path, 'r', shared=True) as f:
            content = f.read()
        try:
            records = json.loads(content) if content.strip() else []
        except json.JSONDecodeError as e:
            raise TokenStoreError(f"Token store {self.path} is not valid JSON: {e}") from e
        _check_records(records, self.path)

        used = sum(1 for r in records if r.get("used"))
        return {"total": len(records), "used": used, "unused": len(records) - used}


def _check_records(records: Any, path: Path) -> None:
    if not isinstance(records, list) or not all(isinstance(r, dict) for r in records):
        raise TokenStoreError(f"Token store {path} must contain a list of token records")
