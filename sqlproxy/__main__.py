import logging

import uvicorn

from .config import settings


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def main():
    configure_logging(settings.log_level)
    uvicorn.run("sqlproxy.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
