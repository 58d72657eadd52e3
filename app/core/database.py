"""
Engine and sessions for the InsurMap store (users and their properties).

PostgreSQL in deployment; an in-process sqlite:// database serves local runs and
the test suite. Commits made on behalf of a request that has already been
answered with a timeout are refused, so the caller can resubmit safely.
"""

import time
from collections.abc import Generator
from contextvars import ContextVar

from sqlalchemy import create_engine, event, text
from sqlalchemy.orm import Session, sessionmaker

from app.core.config import settings
from app.core.errors import RequestDeadlineExceeded

# sqlite connections are handed between the event loop and FastAPI's worker threads.
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    echo=settings.DEBUG,
    connect_args=_connect_args,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# time.monotonic() after which the current request no longer has a client waiting.
# Set by RequestTimeoutMiddleware; None outside a request (scripts, migrations).
request_deadline: ContextVar[float | None] = ContextVar("request_deadline", default=None)


@event.listens_for(Session, "before_commit")
def _refuse_commit_after_deadline(session: Session) -> None:
    deadline = request_deadline.get()
    if deadline is not None and time.monotonic() > deadline:
        # Transaction stays open; closing the session rolls it back.
        raise RequestDeadlineExceeded()


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; uncommitted work is rolled back on close."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_db_connected(db: Session) -> bool:
    """True when the account/property store answers SELECT 1."""
    try:
        db.execute(text("SELECT 1"))
        return True
    except Exception:
        return False
