"""
Staff auth API endpoints
"""
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials

from coffee_pos.api.deps import bearer_scheme, get_auth_service, get_current_staff
from coffee_pos.schemas.auth import SessionResponse, SignInRequest, StaffUser
from coffee_pos.services.auth_service import StaffAuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/sign-in", response_model=SessionResponse, summary="Sign in")
def sign_in(
    credentials: SignInRequest,
    auth: StaffAuthService = Depends(get_auth_service)
):
    """
    Exchange staff email and password for a bearer session token
    
    - **email**: Staff email
    - **password**: Staff password
    """
    return auth.sign_in(credentials.email, credentials.password)


@router.post("/sign-out", status_code=status.HTTP_204_NO_CONTENT, summary="Sign out")
def sign_out(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    auth: StaffAuthService = Depends(get_auth_service)
):
    """Invalidate the current session token"""
    if credentials:
        auth.sign_out(credentials.credentials)
    return None


@router.get("/me", response_model=StaffUser, summary="Current staff user")
def me(staff: StaffUser = Depends(get_current_staff)):
    """Return the signed-in staff user"""
    return staff
