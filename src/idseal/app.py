"""idseal — FastAPI gateway application.

A local HTTP front end for custom-ID tokens. Routes call the encrypt/decrypt
facade and render its results; the crypto never sees a request object.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from idseal.auth import make_api_key_checker
from idseal.config import IdsealConfig, load_config
from idseal.errors import ErrorKind
from idseal.machine import MachineIdError, get_machine_uuid
from idseal.routes import ids, meta
from idseal.routes.ids import OperationFailed

logger = logging.getLogger("idseal")
audit_logger = logging.getLogger("idseal.audit")

_BAD_TOKEN_KINDS = frozenset(
    {ErrorKind.DECRYPTION_ERROR, ErrorKind.ENCODING_ERROR}
)


def failure_status(kind: ErrorKind) -> int:
    """HTTP status for a failed operation: 400 if the token won't open, else 422."""
    return 400 if kind in _BAD_TOKEN_KINDS else 422


@asynccontextmanager
async def lifespan(app: FastAPI):
    config: IdsealConfig = app.state.config
    logger.info(
        "idseal gateway ready on %s:%d (token prefix %r, auth %s)",
        config.host,
        config.port,
        config.token_prefix,
        "on" if config.api_key else "off",
    )
    yield
    logger.info("idseal gateway shut down")


def create_app(config: IdsealConfig | None = None) -> FastAPI:
    """Application factory."""
    if config is None:
        config = load_config()

    logging.basicConfig(level=config.log_level.upper())

    app = FastAPI(
        title="idseal",
        description="Machine-bound custom ID tokens",
        version=meta.GATEWAY_VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.seed_provider = get_machine_uuid

    check_key = make_api_key_checker(config.api_key)

    # ── Exception handlers ────────────────────────────────────

    @app.exception_handler(OperationFailed)
    async def operation_failed_handler(request: Request, exc: OperationFailed):
        failure = exc.failure
        return JSONResponse(
            status_code=failure_status(failure.kind),
            content={
                "kind": failure.kind.value,
                "detail": failure.detail,
                "reason": failure.reason.value if failure.reason else None,
            },
        )

    @app.exception_handler(MachineIdError)
    async def machine_id_handler(request: Request, exc: MachineIdError):
        logger.warning("Machine UUID lookup failed: %s", exc)
        return JSONResponse(status_code=503, content={"detail": str(exc)})

    # ── Audit middleware ──────────────────────────────────────

    @app.middleware("http")
    async def audit_log(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        elapsed = time.monotonic() - start
        audit_logger.info(
            "%s %s %d %.3fs",
            request.method,
            request.url.path,
            response.status_code,
            elapsed,
        )
        return response

    # ── Routers ───────────────────────────────────────────────

    app.include_router(meta.router, dependencies=[Depends(check_key)])
    app.include_router(ids.router, dependencies=[Depends(check_key)])

    return app
