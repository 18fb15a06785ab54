"""
Pydantic schemas for staff authentication
"""
from pydantic import EmailStr, Field

from coffee_pos.schemas.common import CamelModel, Timestamp


class StaffUser(CamelModel):
    """Staff member as exposed to callers"""
    id: str
    email: EmailStr
    display_name: str
    created_at: Timestamp


class StaffUserRecord(StaffUser):
    """Stored staff member, including the password hash"""
    password_hash: str


class StaffRegister(CamelModel):
    """Schema for adding a staff member"""
    email: EmailStr
    password: str = Field(..., min_length=8)
    display_name: str = Field(..., min_length=1, max_length=255)


class SignInRequest(CamelModel):
    """Schema for staff sign-in"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionResponse(CamelModel):
    """Issued staff session"""
    access_token: str
    token_type: str = "bearer"
    expires_at: Timestamp
    user: StaffUser
