"""
Database schema and connection management.

Uses SQLite with SQLAlchemy to hold raw company names scraped per batch.
"""

from datetime import datetime
from pathlib import Path
from sqlalchemy import create_engine, Column, Integer, String, DateTime, UniqueConstraint
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


class ScrapedCompany(Base):
    """Raw company name as it appeared on one job source."""

    __tablename__ = "scraped_companies"
    __table_args__ = (UniqueConstraint("name", "source", name="uq_company_name_source"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False)  # raw, never normalized
    source = Column(String, nullable=False)  # greenhouse, lever, craigslist, ...
    first_seen = Column(DateTime, nullable=False, default=datetime.now)


def init_database(db_path: Path) -> None:
    """
    Initialize database and create tables.

    Args:
        db_path: Path to SQLite database file
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_engine(f"sqlite:///{db_path}")
    Base.metadata.create_all(engine)


def get_session(db_path: Path):
    """
    Get database session.

    Args:
        db_path: Path to SQLite database file

    Returns:
        SQLAlchemy session
    """
    engine = create_engine(f"sqlite:///{db_path}")
    Session = sessionmaker(bind=engine)
    return Session()
