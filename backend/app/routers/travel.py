"""Budget estimates, attraction search and the signed-in user's travel history."""

import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_current_user, get_current_user_id, get_travel_service
from app.models.user import User
from app.schemas.auth import MessageResponse
from app.schemas.budget import BudgetRequest, BudgetResponse, PlaceResponse, PlacesRequest
from app.schemas.travel import SaveTravelRequest, TravelResponse
from app.services.travel_service import TravelService

router = APIRouter()


@router.post("/calculate-budget", response_model=BudgetResponse)
async def calculate_budget(
    req: BudgetRequest,
    travel: TravelService = Depends(get_travel_service),
):
    breakdown = await travel.estimate_budget(
        origin=req.starting_point,
        destination=req.destination,
        nights=req.nights,
        travelers=req.travelers,
        tier=req.budget_level,
        transport_mode=req.transport_mode,
        transport_subtype=req.transport_subtype,
        shopping_amount=req.shopping_amount,
    )
    return BudgetResponse.model_validate(breakdown)


@router.post("/get-places", response_model=list[PlaceResponse])
async def get_places(
    req: PlacesRequest,
    travel: TravelService = Depends(get_travel_service),
):
    places = await travel.find_places(req.destination)
    return [PlaceResponse.model_validate(p) for p in places]


@router.post("/save-travel", status_code=201, response_model=MessageResponse)
async def save_travel(
    req: SaveTravelRequest,
    db: AsyncSession = Depends(get_db),
    user: User = Depends(get_current_user),
    travel: TravelService = Depends(get_travel_service),
):
    await travel.save_travel(db, user.id, req.destination, req.budget, req.nights)
    return MessageResponse(message="Travel data saved successfully!")


@router.get("/travel-history", response_model=list[TravelResponse])
async def travel_history(
    db: AsyncSession = Depends(get_db),
    user_id: uuid.UUID = Depends(get_current_user_id),
    travel: TravelService = Depends(get_travel_service),
):
    travels = await travel.get_history(db, user_id)
    return [TravelResponse.model_validate(t) for t in travels]
