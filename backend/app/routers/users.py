from fastapi import APIRouter, Depends

from app.dependencies import get_current_user
from app.models.user import User
from app.schemas.auth import UserResponse

router = APIRouter()


@router.get("/user-data", response_model=UserResponse)
async def get_user_data(user: User = Depends(get_current_user)):
    return UserResponse.model_validate(user)
