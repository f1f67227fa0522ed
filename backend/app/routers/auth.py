from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.dependencies import get_auth_service
from app.schemas.auth import LoginRequest, LoginResponse, MessageResponse, RegisterRequest, UserResponse
from app.services.auth_service import AuthService

router = APIRouter()


@router.post("/signup", status_code=201, response_model=MessageResponse)
async def signup(
    req: RegisterRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    await auth.register(db, req.name, req.email, req.password)
    return MessageResponse(message="User registered successfully!")


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    db: AsyncSession = Depends(get_db),
    auth: AuthService = Depends(get_auth_service),
):
    result = await auth.login(db, req.email, req.password)
    return LoginResponse(token=result.token, user=UserResponse.model_validate(result.user))
