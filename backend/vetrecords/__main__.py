"""Run the API with uvicorn: ``python -m vetrecords``."""

import uvicorn

from vetrecords.core.config import settings


def main() -> None:
    uvicorn.run(
        "vetrecords.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
