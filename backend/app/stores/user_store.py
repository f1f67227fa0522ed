"""Credential store — user rows keyed by a unique email."""

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, PersistenceError
from app.models.user import User

logger = logging.getLogger(__name__)


class UserStore:
    """Reads and inserts users. Email uniqueness is left to the database constraint."""

    async def get_by_email(self, db: AsyncSession, email: str) -> User | None:
        try:
            result = await db.execute(select(User).where(User.email == email))
        except SQLAlchemyError as e:
            logger.error(f"User lookup by email failed: {e}")
            raise PersistenceError("Failed to fetch user data") from e
        return result.scalar_one_or_none()

    async def get_by_id(self, db: AsyncSession, user_id: uuid.UUID) -> User | None:
        try:
            return await db.get(User, user_id)
        except SQLAlchemyError as e:
            logger.error(f"User lookup for {user_id} failed: {e}")
            raise PersistenceError("Failed to fetch user data") from e

    async def create(
        self, db: AsyncSession, name: str, email: str, password_hash: str
    ) -> User:
        user = User(name=name, email=email, password_hash=password_hash)
        db.add(user)
        try:
            await db.commit()
            await db.refresh(user)
        except IntegrityError as e:
            # Lost the check-then-insert race against a concurrent signup
            await db.rollback()
            logger.info("Duplicate signup rejected by unique constraint")
            raise ConflictError() from e
        except SQLAlchemyError as e:
            await db.rollback()
            logger.error(f"User insert failed: {e}")
            raise PersistenceError("Internal server error!") from e
        return user


user_store = UserStore()
