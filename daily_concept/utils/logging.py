# =============================================
# File: daily_concept/utils/logging.py
# Purpose: Loguru file sink for service diagnostics
# =============================================
import os

from loguru import logger

_configured = False


def configure_logging() -> None:
    """Add the rotating file sink once per process (the default stderr sink stays)."""
    global _configured
    if _configured:
        return
    path = os.getenv("LOG_FILE", "logs/app.log")
    if path:
        logger.add(path, rotation="10 MB", level=os.getenv("LOG_LEVEL", "INFO").upper())
    _configured = True
