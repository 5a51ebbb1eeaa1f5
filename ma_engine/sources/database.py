"""Candidate source backed by the SQLAlchemy VAR table."""

import asyncio
import logging
from typing import Iterable

from sqlalchemy.orm import sessionmaker

from ma_engine.models import UnifiedVar
from ma_engine.models.database import DBVar
from .base import CandidateSource

logger = logging.getLogger(__name__)


class DatabaseSource(CandidateSource):
    """Load VARs from the database."""

    name = "database"

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def load(self) -> list[UnifiedVar]:
        """Load all stored VARs."""
        return await asyncio.to_thread(self._load)

    def _load(self) -> list[UnifiedVar]:
        session = self.session_factory()
        try:
            rows = session.query(DBVar).order_by(DBVar.id).all()
            return [row.to_unified() for row in rows]
        finally:
            session.close()

    def save(self, vars: Iterable[UnifiedVar]) -> int:
        """Insert or replace VAR records. Returns the number written."""
        session = self.session_factory()
        count = 0
        try:
            for var in vars:
                session.merge(DBVar.from_unified(var))
                count += 1
            session.commit()
        finally:
            session.close()
        logger.info(f"Saved {count} VARs to database")
        return count
