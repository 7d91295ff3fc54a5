"""ID endpoints — encrypt a custom ID, decrypt a token, report the host UUID.

When a request leaves out ``uuid`` the gateway host's machine UUID is used,
so a local gateway behaves like running the tool on the machine itself.
"""

from __future__ import annotations

from typing import Callable

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from idseal.config import IdsealConfig
from idseal.deps import get_config, get_seed_provider
from idseal.handler import Failure, decrypt_id, encrypt_id, format_token

router = APIRouter(prefix="/api/v1", tags=["ids"])


class OperationFailed(Exception):
    """Carries a Failure result out of a route to the app's exception handler."""

    def __init__(self, failure: Failure):
        super().__init__(failure.detail)
        self.failure = failure


class EncryptRequest(BaseModel):
    custom_id: str
    uuid: str | None = None


class DecryptRequest(BaseModel):
    token: str
    uuid: str | None = None


def _seed(uuid: str | None, seed_provider: Callable[[], str]) -> str:
    return seed_provider() if uuid is None else uuid


@router.post("/ids/encrypt")
def encrypt(
    body: EncryptRequest,
    config: IdsealConfig = Depends(get_config),
    seed_provider: Callable[[], str] = Depends(get_seed_provider),
):
    result = encrypt_id(body.custom_id, _seed(body.uuid, seed_provider))
    if isinstance(result, Failure):
        raise OperationFailed(result)
    return {
        "original": result.original,
        "token": format_token(result.token_body, config.token_prefix),
    }


@router.post("/ids/decrypt")
def decrypt(
    body: DecryptRequest,
    seed_provider: Callable[[], str] = Depends(get_seed_provider),
):
    result = decrypt_id(body.token, _seed(body.uuid, seed_provider))
    if isinstance(result, Failure):
        raise OperationFailed(result)
    return {"token": result.token, "original": result.original}


@router.get("/machine-uuid")
def machine_uuid(seed_provider: Callable[[], str] = Depends(get_seed_provider)):
    return {"uuid": seed_provider()}
