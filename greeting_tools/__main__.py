"""Run the tool server: ``python -m greeting_tools``."""
import logging
import sys

import uvicorn

from greeting_tools.config import settings


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        stream=sys.stderr,
    )
    uvicorn.run(
        "greeting_tools.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
