"""Process entry point — `python -m walletreg` serves the API with uvicorn.

uvicorn handles SIGINT/SIGTERM and drains in-flight requests before the
lifespan shutdown disposes the connection pool.
"""

import uvicorn

from walletreg.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "walletreg.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
