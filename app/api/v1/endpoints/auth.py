from fastapi import APIRouter, HTTPException, status

from app.core.config import settings
from app.schemas.auth import LoginRequest, TokenResponse
from app.services.auth import AuthService

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
async def login(credentials: LoginRequest):
    """Exchange credentials for a bearer token identifying the caller."""
    caller = AuthService.authenticate(credentials.email, credentials.password)
    if not caller:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials"
        )

    return TokenResponse(
        access_token=AuthService.create_access_token(caller),
        expires_in=settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
