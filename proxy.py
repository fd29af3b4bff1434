"""Run the Z.AI proxy under uvicorn.

Usage:
    python proxy.py

Host, port and log level come from configs/config_default.yaml and the
ZAIPROXY_* environment variables.
"""

import uvicorn

from zaiproxy import create_app, load_settings, setup_logging

settings = load_settings()
logger = setup_logging(settings.log_level)
app = create_app(settings)


if __name__ == "__main__":
    logger.info("Starting Z.AI proxy on %s:%s", settings.host, settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
