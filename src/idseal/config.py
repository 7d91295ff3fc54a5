"""Configuration for the idseal gateway.

Reads from config/idseal.ini if present, environment variables override.
The API key never belongs in version control.
"""

from __future__ import annotations

import configparser
import os
from dataclasses import dataclass
from pathlib import Path

_CONFIG_FILE = Path(__file__).resolve().parent.parent.parent / "config" / "idseal.ini"


@dataclass(frozen=True)
class IdsealConfig:
    """Gateway configuration. Immutable once loaded."""

    api_key: str = ""
    host: str = "127.0.0.1"
    port: int = 8000
    token_prefix: str = "00"
    log_level: str = "INFO"

    def __post_init__(self):
        if len(self.token_prefix) != 2:
            raise ValueError(
                f"token_prefix must be exactly 2 characters, got {self.token_prefix!r}"
            )


def load_config(config_path: Path | None = None) -> IdsealConfig:
    """Load config from INI file, then override with environment variables."""
    path = config_path or _CONFIG_FILE
    kwargs: dict = {}

    if path.exists():
        parser = configparser.ConfigParser()
        parser.read(path)
        for section, ini_key, config_key in [
            ("gateway", "api_key", "api_key"),
            ("gateway", "host", "host"),
            ("token", "prefix", "token_prefix"),
            ("logging", "level", "log_level"),
        ]:
            val = parser.get(section, ini_key, fallback=None)
            if val is not None:
                kwargs[config_key] = val
        port_str = parser.get("gateway", "port", fallback=None)
        if port_str is not None:
            kwargs["port"] = int(port_str)

    env_map = {
        "IDSEAL_API_KEY": "api_key",
        "IDSEAL_HOST": "host",
        "IDSEAL_PORT": "port",
        "IDSEAL_TOKEN_PREFIX": "token_prefix",
        "IDSEAL_LOG_LEVEL": "log_level",
    }
    for env_key, config_key in env_map.items():
        val = os.getenv(env_key)
        if val is not None:
            if config_key == "port":
                kwargs[config_key] = int(val)
            else:
                kwargs[config_key] = val

    return IdsealConfig(**kwargs)
