"""
Database engine, session management, and base model.

Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from pond_ledger.config import get_settings

settings = get_settings()

# SQLite connections are created on one thread and used by the
# request worker threads, so the same-thread check must be off.
connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

# --- Engine ---
engine = create_engine(
    settings.DATABASE_URL,
    connect_args=connect_args,
    pool_pre_ping=True,
)

# --- Session Factory ---
# autocommit=False: the API layer decides when a unit of work is
# committed, so a sale and the receivable it opens are saved together
# or not at all.
# autoflush=False: SQL is only sent on an explicit flush or commit.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    The session is always closed when the request finishes, even
    if an error occurs. Anything not committed by then is rolled
    back.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
