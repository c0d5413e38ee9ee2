"""
Entry point: python -m mailgate

Configures logging and serves the API with uvicorn on the configured
host and port.
"""

import logging

import uvicorn

from mailgate.config.settings import get_settings


def main() -> None:
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
    )

    logging.getLogger(__name__).info("Listening on %s:%s", settings.host, settings.port)
    uvicorn.run(
        "mailgate.api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
