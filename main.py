"""
main.py — Single entry point.

Serves the listing pipeline over HTTP until SIGINT/SIGTERM:

  asyncio event loop
    └── aiohttp web server
          POST /analyze-item  → pipeline.analyze_listing
          GET  /health
"""
import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

import config
import key_store
from server import start_server

logger = logging.getLogger(__name__)

# Third-party loggers that are too chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "aiohttp.access", "google_genai")


def configure_logging() -> None:
    """stdout + DATA_DIR/listing.log; level from LOG_LEVEL (default INFO)."""
    data_dir = Path(config.DATA_DIR)
    data_dir.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(str(data_dir / "listing.log"), encoding="utf-8"),
        ],
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def _log_startup_summary() -> None:
    logger.info("Provider order: %s", " → ".join(config.provider_order()) or "(none)")
    for name, value in key_store.get_all_keys().items():
        logger.info("  %-20s %s", name, key_store.mask(value))
    if config.PRICE_ADJUSTMENT_PCT:
        logger.info("Price adjustment: %+.1f%%", config.PRICE_ADJUSTMENT_PCT)


async def run() -> None:
    _log_startup_summary()
    runner = await start_server()

    shutdown = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown.set)
        except (NotImplementedError, RuntimeError):
            # add_signal_handler is unavailable on Windows
            pass

    try:
        await shutdown.wait()
        logger.info("Shutdown signal received, stopping server…")
    finally:
        await runner.cleanup()
    logger.info("Server stopped.")


def main() -> None:
    configure_logging()
    try:
        asyncio.run(run())
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
