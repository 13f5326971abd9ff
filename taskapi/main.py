"""Process entry point: serve the task API with uvicorn.

    taskapi                  # or: python -m taskapi.main
    uvicorn taskapi.app.main:app --reload
"""

import uvicorn

from taskapi.app.config import get_settings
from taskapi.app.core.logging_config import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level)
    uvicorn.run(
        "taskapi.app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=(settings.log_level or "info").lower(),
    )


if __name__ == "__main__":
    main()
