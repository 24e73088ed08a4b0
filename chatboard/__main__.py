"""
Run the Chatboard API with uvicorn.

Usage:
    python -m chatboard
"""

import logging

import uvicorn

from chatboard.core.config import get_settings
from chatboard.core.logging_config import setup_logging


def main() -> None:
    settings = get_settings()
    setup_logging(settings)
    logging.getLogger("chatboard").info("Chat app listening on port %s", settings.port)
    uvicorn.run(
        "chatboard.app:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
