"""
Company Names Repository.

Responsibilities:
- Store raw company names per source.
- Load a batch of names for blocking and resolution.

Non-Responsibilities:
- No business logic.
- No normalization or matching.

Invariant:
Names are stored exactly as scraped; repositories must not encode domain decisions.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from employermatch.database import ScrapedCompany
from employermatch.logger import get_logger


def add_names(session, names: Iterable[str], source: str) -> int:
    """
    Insert raw names for a source.

    Blank names and (name, source) pairs already stored are skipped.

    Returns:
        Number of rows inserted

    Raises:
        SQLAlchemyError: After rolling back, if the commit fails
    """
    logger = get_logger()
    existing = {
        row.name
        for row in session.query(ScrapedCompany.name).filter_by(source=source)
    }

    inserted = 0
    for name in names:
        if not name or not name.strip() or name in existing:
            continue
        session.add(ScrapedCompany(name=name, source=source))
        existing.add(name)
        inserted += 1

    try:
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.record_error(type(e).__name__)
        logger.error("Failed to store company names", source=source, error=str(e))
        raise

    logger.info("Stored company names", source=source, inserted=inserted)
    return inserted


def load_batch(
    session,
    source: Optional[str] = None,
    since: Optional[datetime] = None,
) -> List[str]:
    """
    Distinct raw names, ordered by first sighting.

    Args:
        session: SQLAlchemy session
        source: Only names seen on this source
        since: Only names first seen at or after this time
    """
    seen = func.min(ScrapedCompany.first_seen)
    query = session.query(ScrapedCompany.name, seen)
    if source is not None:
        query = query.filter(ScrapedCompany.source == source)
    if since is not None:
        query = query.filter(ScrapedCompany.first_seen >= since)
    rows = query.group_by(ScrapedCompany.name).order_by(seen, ScrapedCompany.name).all()
    return [row.name for row in rows]
