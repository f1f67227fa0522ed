from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class BudgetRequest(BaseModel):
    starting_point: str | None = None
    destination: str | None = None
    nights: int = Field(default=0, ge=0)
    travelers: int = Field(default=1, ge=1)
    budget_level: str | None = None
    transport_mode: str | None = None
    transport_subtype: str | None = None
    shopping_amount: str | float | None = None

    model_config = {"alias_generator": to_camel, "populate_by_name": True}


class BudgetResponse(BaseModel):
    distance_in_km: float
    transportation_cost: float
    food_cost: float
    shopping_cost: float
    hotel_cost: float
    total_cost: float

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


class PlacesRequest(BaseModel):
    destination: str | None = None


class PlaceResponse(BaseModel):
    name: str
    address: str | None = None
    rating: float | None = None
    photo: str | None = None

    model_config = {"from_attributes": True}
