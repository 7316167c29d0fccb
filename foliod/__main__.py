"""Entry point for running foliod.

This module provides the entry point for starting the admin API server.
"""

import logging
import sys

import uvicorn

from folio_library.config import load_config

logger = logging.getLogger(__name__)


def main() -> None:
    """Run foliod.

    Loads configuration and starts the uvicorn server.
    """
    try:
        config = load_config()

        uvicorn.run(
            "foliod.main:app",
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
        )

    except KeyboardInterrupt:
        logger.info("Received interrupt, shutting down")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Failed to start foliod: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
