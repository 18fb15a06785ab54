"""
Pydantic schemas for one-time customer link tokens
"""
from pydantic import Field, model_validator
from typing import Optional

from coffee_pos.schemas.common import CamelModel, Timestamp


class TokenPrefill(CamelModel):
    """Customer details staff can fill in ahead of time"""
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=50)
    customer_address: Optional[str] = Field(None, max_length=1000)


class CustomerToken(TokenPrefill):
    """Stored customer link token"""
    id: str
    token: str = Field(..., min_length=1)
    created_at: Timestamp
    expires_at: Timestamp
    created_by: str
    is_used: bool = False
    used_at: Optional[Timestamp] = None
    order_id: Optional[str] = None
    version: int = 1
    
    @model_validator(mode="after")
    def check_used_is_bound(self):
        if self.is_used and (self.order_id is None or self.used_at is None):
            raise ValueError("used token must record orderId and usedAt")
        return self


class TokenIssueRequest(TokenPrefill):
    """Schema for generating a customer link"""
    ttl_hours: Optional[int] = Field(None, ge=0, description="Hours until the link expires")


class TokenIssueResponse(CamelModel):
    """Generated customer link"""
    token: str
    link: str


class TokenValidation(CamelModel):
    """Outcome of checking a token; record is present unless it was not found"""
    valid: bool
    token_record: Optional[CustomerToken] = None
    reason: Optional[str] = None


class CustomerLinkResponse(CamelModel):
    """What the customer order page sees for a link"""
    valid: bool
    reason: Optional[str] = None
    prefill: Optional[TokenPrefill] = None
    expires_at: Optional[Timestamp] = None
