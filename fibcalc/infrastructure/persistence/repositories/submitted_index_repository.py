"""
SQL Submitted Index Repository.

Implements SubmittedIndexRepositoryProtocol with SQLAlchemy sessions.

Architecture Notes:
    - Infrastructure Layer
    - One short-lived session per call, committed on success and rolled back
      on error; SQLAlchemyError propagates to the caller
    - Insertion order = primary key order
"""

import logging

from sqlalchemy.orm import Session, sessionmaker

from fibcalc.infrastructure.persistence.database import SubmittedIndexRecord

logger = logging.getLogger(__name__)


class SqlSubmittedIndexRepository:
    """
    Durable, append-only record of submitted indices.

    Examples:
        >>> repo = SqlSubmittedIndexRepository(get_session_factory())
        >>> repo.append(5)
        >>> repo.append(5)
        >>> repo.list_all()
        [5, 5]
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self.session_factory = session_factory

    def append(self, index: int) -> None:
        session: Session = self.session_factory()
        try:
            session.add(SubmittedIndexRecord(number=index))
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()
        logger.debug(f"Appended index {index} to durable store")

    def list_all(self) -> list[int]:
        session: Session = self.session_factory()
        try:
            rows = (
                session.query(SubmittedIndexRecord.number)
                .order_by(SubmittedIndexRecord.id.asc())
                .all()
            )
        finally:
            session.close()
        return [row.number for row in rows]
