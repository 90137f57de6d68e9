"""
Authentication endpoint.

``POST /api/auth/login`` exchanges an email and password for an
access token.  An unknown email is registered as a new member on the
spot, so this is also the sign-up route.
"""

from fastapi import APIRouter, Depends

from gyatt_api.app.api.deps import get_user_service
from gyatt_api.app.core.config import Settings, get_settings
from gyatt_api.app.core.security import create_access_token, token_claims_for
from gyatt_api.app.schemas.user import LoginRequest, LoginResponse, UserRead
from gyatt_api.app.services.user_service import UserService

router = APIRouter()


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
async def login(
    payload: LoginRequest,
    service: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Authenticate (or auto-register) a user and return a token.

    The token is valid for seven days by default and carries the
    user's id, email and admin flag.  There is no refresh token; the
    client logs in again once it expires.
    """
    record, _ = await service.authenticate(payload.email, payload.password)
    token = create_access_token(token_claims_for(record), settings)
    return LoginResponse(token=token, user=UserRead.model_validate(record))
