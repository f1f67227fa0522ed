"""Shared test fixtures and configuration."""

from __future__ import annotations

import os
from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-do-not-use")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("GOOGLE_MAPS_API_KEY", "test-maps-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_DIR", "/tmp/wayfarer_test_logs")

from app import models  # noqa: F401
from app.database import Base
from app.exceptions import GatewayError
from app.services.auth_service import AuthService
from app.services.maps_client import Place
from app.services.travel_service import TravelService

TEST_SECRET = "test-secret-key"


class FakeMapsGateway:
    """In-process stand-in for the Google Maps client."""

    def __init__(self, distance_km: float = 100.0, places: list[Place] | None = None):
        self.distance_km = distance_km
        self.places = places if places is not None else [
            Place(name="Fort Aguada", address="Candolim, Goa", rating=4.4, photo=None),
        ]
        self.fail = False
        self.distance_calls: list[tuple[str, str]] = []
        self.place_calls: list[str] = []

    async def get_distance_km(self, origin: str, destination: str) -> float:
        self.distance_calls.append((origin, destination))
        if self.fail:
            raise GatewayError("Distance Matrix unavailable")
        return self.distance_km

    async def search_places(self, destination: str) -> list[Place]:
        self.place_calls.append(destination)
        if self.fail:
            raise GatewayError("Places unavailable")
        return self.places


@pytest_asyncio.fixture
async def engine():
    """Fresh in-memory database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest.fixture
def auth_service() -> AuthService:
    return AuthService(secret_key=TEST_SECRET, bcrypt_rounds=4)


@pytest.fixture
def fake_gateway() -> FakeMapsGateway:
    return FakeMapsGateway()


@pytest.fixture
def travel_service(fake_gateway) -> TravelService:
    return TravelService(gateway=fake_gateway)


@pytest_asyncio.fixture
async def client(session_factory, auth_service, fake_gateway) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client against the app with the database and maps service replaced."""
    from app.database import get_db
    from app.dependencies import get_auth_service, get_maps_gateway
    from app.main import app

    async def _get_test_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    app.dependency_overrides[get_maps_gateway] = lambda: fake_gateway

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()
