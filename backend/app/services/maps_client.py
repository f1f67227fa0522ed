"""Google Maps client — route distances (Distance Matrix) and attractions (Places)."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from app.exceptions import GatewayError

logger = logging.getLogger(__name__)


@dataclass
class Place:
    """Attraction summary mapped from a Places text-search result."""
    name: str
    address: str | None
    rating: float | None
    photo: str | None


class MapsGateway(Protocol):
    async def get_distance_km(self, origin: str, destination: str) -> float: ...

    async def search_places(self, destination: str) -> list[Place]: ...


class GoogleMapsClient:
    """Adapter for the Google Distance Matrix and Places Text Search APIs.

    Each call makes a single attempt; failures surface as ``GatewayError``.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://maps.googleapis.com/maps/api",
        timeout: float = 15.0,
        photo_max_width: int = 400,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._photo_max_width = photo_max_width
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def _get_json(self, path: str, params: dict) -> dict:
        if not self._api_key:
            raise GatewayError("Google Maps API key is not configured.")

        client = await self._get_client()
        try:
            resp = await client.get(path, params={**params, "key": self._api_key})
            resp.raise_for_status()
            data = resp.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Google Maps {path} returned HTTP {e.response.status_code}")
            raise GatewayError() from e
        except httpx.RequestError as e:
            logger.error(f"Google Maps {path} request failed: {e!r}")
            raise GatewayError() from e
        except ValueError as e:
            logger.error(f"Google Maps {path} returned a non-JSON body")
            raise GatewayError() from e

        if not isinstance(data, dict):
            raise GatewayError()
        return data

    async def get_distance_km(self, origin: str, destination: str) -> float:
        """Driving distance of the first origin/destination pair, in km."""
        data = await self._get_json(
            "/distancematrix/json",
            {"origins": origin, "destinations": destination},
        )
        try:
            element = data["rows"][0]["elements"][0]
        except (KeyError, IndexError, TypeError) as e:
            logger.error(
                f"Distance Matrix response without rows (status={data.get('status')})"
            )
            raise GatewayError() from e

        meters = (element.get("distance") or {}).get("value") or 0
        if not meters:
            # Unroutable pairs come back as NOT_FOUND / ZERO_RESULTS without a distance
            logger.warning(
                f"No distance for {origin!r} -> {destination!r} "
                f"(element status={element.get('status')}); using 0 km"
            )
        return meters / 1000

    async def search_places(self, destination: str) -> list[Place]:
        """Tourist attractions for a destination, in the order Google ranks them."""
        data = await self._get_json(
            "/place/textsearch/json",
            {"query": f"Tourist attractions in {destination}"},
        )
        if data.get("status") != "OK":
            logger.error(
                f"Places API error for {destination!r}: status={data.get('status')} "
                f"message={data.get('error_message')}"
            )
            raise GatewayError()

        return [
            Place(
                name=r.get("name", ""),
                address=r.get("formatted_address"),
                rating=r.get("rating"),
                photo=self._photo_url(r["photos"][0]) if r.get("photos") else None,
            )
            for r in data.get("results", [])
        ]

    def _photo_url(self, photo: dict) -> str | None:
        reference = photo.get("photo_reference")
        if not reference:
            return None
        return str(
            httpx.URL(
                f"{self._base_url}/place/photo",
                params={
                    "maxwidth": self._photo_max_width,
                    "photoreference": reference,
                    "key": self._api_key,
                },
            )
        )

    async def close(self):
        if self._client:
            await self._client.aclose()
            self._client = None
