"""Database models for prospect persistence."""

import logging
from typing import Generator, List, Optional

from sqlalchemy import create_engine, Column, Integer, Float, Text
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from sqlalchemy.pool import StaticPool

from stoneforged.config import load_config
from stoneforged.constants import SEED_PROSPECTS
from stoneforged.models import Prospect

logger = logging.getLogger(__name__)


def get_database_url() -> str:
    """
    Get database URL based on environment.

    DATABASE_URL wins if set, then database_url from the STONEFORGED_CONFIG
    file; otherwise ./stoneforged.db in the working directory.
    """
    return load_config().database_url


DATABASE_URL = get_database_url()

# Handle SQLite-specific settings
connect_args = {}
engine_kwargs = {}
if DATABASE_URL.startswith("sqlite"):
    connect_args["check_same_thread"] = False
    # In-memory databases live per connection; share one
    if DATABASE_URL in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool

engine = create_engine(DATABASE_URL, connect_args=connect_args, **engine_kwargs)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


class ProspectRecord(Base):
    """A prospect row. Every column but the id is nullable and unchecked."""
    __tablename__ = "prospects"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    brand = Column(Text)
    trigger = Column(Text)
    score = Column(Float)
    decision_maker = Column(Text)
    next_action = Column(Text)

    def __repr__(self):
        return f"<ProspectRecord {self.id}: {self.brand} ({self.score})>"

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "id": self.id,
            "brand": self.brand,
            "trigger": self.trigger,
            "score": self.score,
            "decision_maker": self.decision_maker,
            "next_action": self.next_action,
        }


def init_db():
    """Initialize database tables."""
    Base.metadata.create_all(bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI routes."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def list_prospects(db: Session) -> List[ProspectRecord]:
    """All prospects, highest score first."""
    return db.query(ProspectRecord).order_by(ProspectRecord.score.desc()).all()


def insert_prospect(
    db: Session,
    brand: Optional[str] = None,
    trigger: Optional[str] = None,
    score: Optional[float] = None,
    decision_maker: Optional[str] = None,
    next_action: Optional[str] = None,
) -> int:
    """
    Insert a prospect as given. Returns the new id.

    Nothing is validated here; blank brands and out-of-range scores are
    stored as-is.
    """
    record = ProspectRecord(
        brand=brand,
        trigger=trigger,
        score=score,
        decision_maker=decision_maker,
        next_action=next_action,
    )
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("Added prospect %d: %s", record.id, brand)
    return record.id


def delete_prospect(db: Session, prospect_id: int) -> bool:
    """Delete a prospect by id. Returns True iff a row was removed."""
    deleted = db.query(ProspectRecord).filter(ProspectRecord.id == prospect_id).delete()
    db.commit()
    if deleted:
        logger.info("Deleted prospect %d", prospect_id)
    return deleted > 0


def seed_examples(db: Session) -> int:
    """
    Insert the example prospects, skipping ids that already exist.

    Returns:
        Number of rows inserted
    """
    inserted = 0
    for row in SEED_PROSPECTS:
        if db.get(ProspectRecord, row["id"]) is not None:
            continue
        db.add(ProspectRecord(**row))
        inserted += 1

    db.commit()
    logger.info("Seeded %d example prospects", inserted)
    return inserted


def load_snapshot(db: Session) -> tuple[Prospect, ...]:
    """The full list as immutable Prospect snapshots, highest score first."""
    return tuple(Prospect.from_dict(r.to_dict()) for r in list_prospects(db))
