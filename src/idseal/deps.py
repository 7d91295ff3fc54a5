"""FastAPI dependencies for idseal routes."""

from __future__ import annotations

from typing import Callable

from fastapi import Request

from idseal.config import IdsealConfig


def get_config(request: Request) -> IdsealConfig:
    """Get the loaded configuration from app state."""
    return request.app.state.config


def get_seed_provider(request: Request) -> Callable[[], str]:
    """Get the machine UUID lookup used when a request omits the seed."""
    return request.app.state.seed_provider
