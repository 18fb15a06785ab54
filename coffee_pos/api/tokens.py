"""
Customer link API endpoints (staff)
"""
from fastapi import APIRouter, Depends, status, Query
from typing import List

from coffee_pos.api.deps import get_current_staff, get_token_service
from coffee_pos.schemas.auth import StaffUser
from coffee_pos.schemas.token import CustomerToken, TokenIssueRequest, TokenIssueResponse, TokenPrefill
from coffee_pos.services.token_service import CustomerTokenService

router = APIRouter(prefix="/tokens", tags=["customer-links"])


@router.post("", response_model=TokenIssueResponse, status_code=status.HTTP_201_CREATED, summary="Generate customer link")
def issue_token(
    request: TokenIssueRequest,
    staff: StaffUser = Depends(get_current_staff),
    service: CustomerTokenService = Depends(get_token_service)
):
    """
    Generate a one-time customer order link
    
    - **customerName**, **customerPhone**, **customerAddress**: optional prefill
    - **ttlHours**: hours until the link expires (default: 48)
    """
    prefill = TokenPrefill(
        customer_name=request.customer_name,
        customer_phone=request.customer_phone,
        customer_address=request.customer_address
    )
    token = service.issue(staff.id, prefill, request.ttl_hours)
    return TokenIssueResponse(token=token, link=service.link_for(token))


@router.get("/active", response_model=List[CustomerToken], summary="Get active customer links")
def get_active_tokens(
    mine: bool = Query(False, description="Only links issued by the signed-in staff member"),
    staff: StaffUser = Depends(get_current_staff),
    service: CustomerTokenService = Depends(get_token_service)
):
    """Unused, unexpired customer links"""
    return service.list_active(created_by=staff.id if mine else None)
