import uuid
from datetime import datetime

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class SaveTravelRequest(BaseModel):
    destination: str | None = None
    budget: float | None = None
    nights: int | None = None


class TravelResponse(BaseModel):
    id: uuid.UUID
    user_id: uuid.UUID
    destination: str
    budget: float
    nights: int
    date: datetime

    model_config = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}
