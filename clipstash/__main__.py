"""Run the clipstash API with uvicorn: ``python -m clipstash``."""

import uvicorn

from clipstash.core.config.settings import settings


def main() -> None:
    uvicorn.run(
        "clipstash.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.RELOAD,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
