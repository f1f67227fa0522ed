"""Travel record store — append-only rows looked up by owner."""

import logging
import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import PersistenceError
from app.models.travel import Travel

logger = logging.getLogger(__name__)


class TravelStore:
    async def add(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        destination: str,
        budget: float,
        nights: int,
        date: datetime,
    ) -> Travel:
        travel = Travel(
            user_id=user_id,
            destination=destination,
            budget=budget,
            nights=nights,
            date=date,
        )
        db.add(travel)
        try:
            await db.commit()
            await db.refresh(travel)
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"Error saving travel data for user {user_id}: {e}")
            raise PersistenceError("Failed to save travel data!") from e
        return travel

    async def list_for_user(self, db: AsyncSession, user_id: uuid.UUID) -> list[Travel]:
        """All travels owned by ``user_id``, newest first."""
        try:
            result = await db.execute(
                select(Travel)
                .where(Travel.user_id == user_id)
                .order_by(Travel.date.desc())
            )
        except SQLAlchemyError as e:
            logger.error(f"Error fetching travel history for user {user_id}: {e}")
            raise PersistenceError("Failed to fetch travel history!") from e
        return list(result.scalars().all())


travel_store = TravelStore()
