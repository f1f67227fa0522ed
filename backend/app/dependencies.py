"""Dependency wiring: process-wide services built from settings, and the auth gate."""

import uuid

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.exceptions import AuthorizationError
from app.models.user import User
from app.services.auth_service import AuthService
from app.services.maps_client import GoogleMapsClient, MapsGateway
from app.services.travel_service import TravelService
from app.stores.user_store import user_store

# auto_error=False so a missing header is a 401 from AuthService, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)

# Built lazily by async getters, which run on the event loop and never race in the threadpool
_auth_service: AuthService | None = None
_maps_gateway: GoogleMapsClient | None = None
_travel_service: TravelService | None = None


async def get_auth_service() -> AuthService:
    global _auth_service
    if _auth_service is None:
        _auth_service = AuthService(
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            access_token_expire_minutes=settings.access_token_expire_minutes,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
    return _auth_service


async def get_maps_gateway() -> MapsGateway:
    global _maps_gateway
    if _maps_gateway is None:
        _maps_gateway = GoogleMapsClient(
            api_key=settings.google_maps_api_key,
            base_url=settings.google_maps_base_url,
            timeout=settings.google_maps_timeout,
            photo_max_width=settings.places_photo_max_width,
        )
    return _maps_gateway


async def get_travel_service(gateway: MapsGateway = Depends(get_maps_gateway)) -> TravelService:
    global _travel_service
    if _travel_service is None or _travel_service.gateway is not gateway:
        _travel_service = TravelService(gateway=gateway)
    return _travel_service


async def close_services() -> None:
    global _maps_gateway, _travel_service
    if _maps_gateway is not None:
        await _maps_gateway.close()
    _maps_gateway = None
    _travel_service = None


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> uuid.UUID:
    return auth.authenticate(credentials.credentials if credentials else None)


async def get_current_user(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> User:
    user = await user_store.get_by_id(db, user_id)
    if user is None:
        # Signed token for a user that no longer exists
        raise AuthorizationError("Invalid token!")
    return user
