"""Module: logging."""

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure process-wide logging once, at startup."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # basicConfig is a no-op once handlers exist; the level must still follow settings.
    logging.getLogger().setLevel(level.upper())
    # Uvicorn installs its own handlers; keep SQLAlchemy quiet unless echo is on.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
