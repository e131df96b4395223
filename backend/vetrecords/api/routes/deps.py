"""Module: deps."""

from typing import Generator

from fastapi import Request
from sqlalchemy.orm import Session


# Dependency provider: one DB session per request lifecycle, drawn from the
# session factory the application factory put on app.state.
def get_db(request: Request) -> Generator[Session, None, None]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
