"""
Persistence for location reports
"""
import logging
from itertools import groupby
from typing import List, Optional
from sqlalchemy import select, delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import ColumnElement

from app.core.exceptions import StoreUnavailable
from app.models import LocationReport

logger = logging.getLogger(__name__)

NEWEST_FIRST = (LocationReport.recorded_at.desc(), LocationReport.id.desc())


class LocationStore:
    """Reads and writes location_reports rows through one session"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _rollback(self):
        try:
            await self.db.rollback()
        except SQLAlchemyError:
            logger.exception("Rollback failed")

    async def insert(self, report: LocationReport) -> int:
        try:
            self.db.add(report)
            await self.db.flush()
            report_id = report.id
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to save location: {e}")
            await self._rollback()
            raise StoreUnavailable("Failed to save location") from e
        return report_id

    async def query_one(self, predicate: ColumnElement) -> Optional[LocationReport]:
        try:
            result = await self.db.execute(
                select(LocationReport).where(predicate).order_by(*NEWEST_FIRST).limit(1)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to retrieve location: {e}")
            raise StoreUnavailable("Failed to retrieve location") from e

    async def query_many(self, predicate: ColumnElement, limit: int) -> List[LocationReport]:
        try:
            result = await self.db.execute(
                select(LocationReport).where(predicate).order_by(*NEWEST_FIRST).limit(limit)
            )
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to retrieve history: {e}")
            raise StoreUnavailable("Failed to retrieve history") from e

    async def aggregate(self, predicate: ColumnElement) -> dict:
        query = select(
            func.count(LocationReport.id),
            func.avg(LocationReport.accuracy),
            func.min(LocationReport.latitude),
            func.max(LocationReport.latitude),
        ).where(predicate)
        try:
            total, avg_accuracy, min_lat, max_lat = (await self.db.execute(query)).one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to calculate statistics: {e}")
            raise StoreUnavailable("Failed to calculate statistics") from e
        return {
            "total": total or 0,
            "avg_accuracy": float(avg_accuracy) if avg_accuracy is not None else None,
            "min_lat": min_lat,
            "max_lat": max_lat,
        }

    async def distinct_identities(self, limit: int) -> List[dict]:
        """
        Identities from the newest `limit` rows, newest first.
        Only consecutive repeats are collapsed, so an identity can show up
        twice when other users' rows fall between its reports.
        """
        query = (
            select(LocationReport.phone_number, LocationReport.email)
            .where((LocationReport.phone_number != None) | (LocationReport.email != None))
            .order_by(*NEWEST_FIRST)
            .limit(limit)
        )
        try:
            rows = (await self.db.execute(query)).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to retrieve users: {e}")
            raise StoreUnavailable("Failed to retrieve users") from e
        return [
            {"phone_number": phone_number, "email": email}
            for (phone_number, email), _ in groupby(tuple(row) for row in rows)
        ]

    async def delete(self, report_id: int) -> int:
        try:
            result = await self.db.execute(
                delete(LocationReport).where(LocationReport.id == report_id)
            )
            await self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete location {report_id}: {e}")
            await self._rollback()
            raise StoreUnavailable("Failed to delete location") from e
        return result.rowcount
