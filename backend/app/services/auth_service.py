"""Auth service — signup, password login and bearer-token validation."""

import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InvalidCredentialsError,
    ValidationError,
)
from app.models.user import User
from app.stores.user_store import UserStore, user_store

logger = logging.getLogger(__name__)


@dataclass
class LoginResult:
    token: str
    user: User


class AuthService:
    """Issues and checks stateless JWTs; passwords are stored as bcrypt hashes."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60,
        bcrypt_rounds: int = 10,
        store: UserStore = user_store,
    ):
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._token_ttl = timedelta(minutes=access_token_expire_minutes)
        self._store = store
        self.pwd_context = CryptContext(
            schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=bcrypt_rounds
        )

    async def register(
        self, db: AsyncSession, name: str | None, email: str | None, password: str | None
    ) -> User:
        if not name or not email or not password:
            raise ValidationError("All fields are required!")

        if await self._store.get_by_email(db, email):
            raise ConflictError("Email already exists!")

        user = await self._store.create(
            db, name=name, email=email, password_hash=self.pwd_context.hash(password)
        )
        logger.info(f"Registered user {user.id}")
        return user

    async def login(
        self, db: AsyncSession, email: str | None, password: str | None
    ) -> LoginResult:
        if not email or not password:
            raise ValidationError("All fields are required!")

        user = await self._store.get_by_email(db, email)
        if not user or not self.pwd_context.verify(password, user.password_hash):
            raise InvalidCredentialsError()

        return LoginResult(token=self.create_access_token(user.id), user=user)

    def create_access_token(self, user_id: uuid.UUID, now: datetime | None = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        payload = {"sub": str(user_id), "iat": issued_at, "exp": issued_at + self._token_ttl}
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def authenticate(self, token: str | None) -> uuid.UUID:
        """Return the user id encoded in ``token``.

        A missing token is an ``AuthenticationError`` (401); anything wrong with a
        token that was presented (signature, expiry, claims) is an
        ``AuthorizationError`` (403).
        """
        if not token:
            raise AuthenticationError("Access denied!")

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
            return uuid.UUID(payload["sub"])
        except (JWTError, KeyError, TypeError, ValueError) as e:
            logger.info(f"Rejected bearer token: {type(e).__name__}")
            raise AuthorizationError("Invalid token!") from e
