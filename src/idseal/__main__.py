"""Run the idseal gateway: python -m idseal"""

import uvicorn

from idseal.config import load_config

config = load_config()
uvicorn.run(
    "idseal.app:create_app",
    host=config.host,
    port=config.port,
    factory=True,
    log_level=config.log_level.lower(),
)
