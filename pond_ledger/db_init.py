"""
Database initialization.

Creates any missing tables and seeds the reference rows the
application expects: the default fish type and the farm's ponds.
Safe to run repeatedly; existing rows are left untouched.

Usage:
    python -m pond_ledger.db_init
"""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from pond_ledger.models import Base, FishType, Pond
from pond_ledger.models.base import engine, SessionLocal
from pond_ledger.models.pond import DEFAULT_FISH_TYPE_ID

logger = logging.getLogger(__name__)

DEFAULT_FISH_TYPE_NAME = "Ikan Nila"

DEFAULT_PONDS = [
    ("Kolam 1", "production"),
    ("Kolam 2", "production"),
    ("Kolam 3", "production"),
    ("Kolam 4", "production"),
    ("Kolam Penampungan", "holding"),
]


def seed_reference_data(db: Session) -> None:
    """Insert the default fish type and ponds if they are missing."""
    if db.get(FishType, DEFAULT_FISH_TYPE_ID) is None:
        db.add(FishType(id=DEFAULT_FISH_TYPE_ID, name=DEFAULT_FISH_TYPE_NAME))
        db.flush()
        logger.info("Seeded fish type %s", DEFAULT_FISH_TYPE_NAME)

    existing = set(db.execute(select(Pond.name)).scalars().all())
    for name, pond_type in DEFAULT_PONDS:
        if name in existing:
            continue
        db.add(Pond(
            name=name,
            type=pond_type,
            fish_type_id=DEFAULT_FISH_TYPE_ID,
        ))
        logger.info("Seeded pond %s", name)
    db.flush()


def init_db(bind=None) -> None:
    """Create tables and seed reference data."""
    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    db = SessionLocal(bind=bind)
    try:
        seed_reference_data(db)
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
    logger.info("Database initialized")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
