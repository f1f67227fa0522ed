"""Travel service — budget estimates, attraction lookup and saved travel history."""

import logging
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import GatewayError, ValidationError
from app.models.travel import Travel
from app.services.maps_client import MapsGateway, Place
from app.services.pricing import BudgetBreakdown, compute_budget, resolve_rates
from app.stores.travel_store import TravelStore, travel_store

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TravelService:
    def __init__(
        self,
        gateway: MapsGateway,
        store: TravelStore = travel_store,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.gateway = gateway
        self._store = store
        self._clock = clock

    async def estimate_budget(
        self,
        origin: str | None,
        destination: str | None,
        nights: int,
        travelers: int,
        tier: str | None,
        transport_mode: str | None,
        transport_subtype: str | None,
        shopping_amount: str | float | None = None,
    ) -> BudgetBreakdown:
        """Price a trip from the route distance and the fixed rate tables."""
        # Reject unknown tiers and fares before spending a Distance Matrix call
        resolve_rates(tier, transport_mode, transport_subtype)
        if not origin or not destination:
            raise ValidationError("Starting point and destination are required.")

        try:
            distance_km = await self.gateway.get_distance_km(origin, destination)
        except GatewayError as e:
            raise GatewayError("Error fetching distance data.") from e

        return compute_budget(
            distance_km,
            nights,
            travelers,
            tier,
            transport_mode,
            transport_subtype,
            shopping_amount,
        )

    async def find_places(self, destination: str | None) -> list[Place]:
        if not destination:
            raise ValidationError("Destination is required.")
        try:
            return await self.gateway.search_places(destination)
        except GatewayError as e:
            raise GatewayError("Error fetching places data.") from e

    async def save_travel(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        destination: str | None,
        budget: float | None,
        nights: int | None,
    ) -> Travel:
        if not destination or not budget or not nights:
            logger.warning(
                f"Save travel rejected, missing fields: destination={destination!r} "
                f"budget={budget!r} nights={nights!r}"
            )
            raise ValidationError("All fields are required!")

        return await self._store.add(
            db,
            user_id=user_id,
            destination=destination,
            budget=budget,
            nights=nights,
            date=self._clock(),
        )

    async def get_history(self, db: AsyncSession, user_id: uuid.UUID) -> list[Travel]:
        return await self._store.list_for_user(db, user_id)
