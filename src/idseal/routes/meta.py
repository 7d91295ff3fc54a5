"""Meta endpoints — health and version."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from idseal.config import IdsealConfig
from idseal.deps import get_config

GATEWAY_VERSION = "0.1.0"

router = APIRouter(prefix="/api/v1", tags=["meta"])


@router.get("/health")
def health():
    return {"status": "ok", "service": "idseal"}


@router.get("/version")
def version(config: IdsealConfig = Depends(get_config)):
    return {"gateway": GATEWAY_VERSION, "token_prefix": config.token_prefix}
