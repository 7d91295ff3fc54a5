"""API key guard for the idseal gateway.

No configured key means a local, open gateway. Otherwise every request
must carry the key in the X-API-Key header.
"""

from __future__ import annotations

import hmac

from fastapi import HTTPException, Security
from fastapi.security import APIKeyHeader

_api_key_header = APIKeyHeader(name="X-API-Key", auto_error=False)


def make_api_key_checker(expected_key: str):
    """Build the FastAPI dependency guarding the ID routes."""

    async def check_api_key(
        api_key: str | None = Security(_api_key_header),
    ) -> str | None:
        if not expected_key:
            return None
        if api_key is None or not hmac.compare_digest(
            api_key.encode(), expected_key.encode()
        ):
            raise HTTPException(status_code=401, detail="Invalid or missing API key")
        return api_key

    return check_api_key
