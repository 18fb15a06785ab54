"""
Customer-facing API endpoints: order through a link, track an order
"""
from fastapi import APIRouter, Depends, status

from coffee_pos.api.deps import get_clock, get_customer_order_service, get_order_service, get_settings
from coffee_pos.config import Settings
from coffee_pos.schemas.order import CustomerOrderResponse, CustomerOrderSubmit
from coffee_pos.schemas.token import CustomerLinkResponse
from coffee_pos.schemas.tracking import TrackingResponse
from coffee_pos.services import tracking
from coffee_pos.services.customer_order_service import CustomerOrderService
from coffee_pos.services.order_service import OrderService

router = APIRouter(tags=["customer"])


@router.get("/customer/{token}", response_model=CustomerLinkResponse, summary="Open customer link")
def open_link(token: str, service: CustomerOrderService = Depends(get_customer_order_service)):
    """
    Check a customer link and return its prefilled details
    
    Invalid links return `valid: false` with a reason
    (not found, already used, expired).
    """
    return service.get_link(token)


@router.post(
    "/customer/{token}/orders",
    response_model=CustomerOrderResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Place order through customer link"
)
def submit_order(
    token: str,
    submission: CustomerOrderSubmit,
    service: CustomerOrderService = Depends(get_customer_order_service)
):
    """
    Place an order with a one-time link
    
    - **customerName**, **customerPhone**, **customerAddress**: required
    - **items**: menu picks (productId, quantity, size, addonIds, drinkName)
    - **notes**: optional
    """
    order, tracking_url = service.submit(token, submission)
    return CustomerOrderResponse(
        order_id=order.id,
        status=order.status,
        total_amount=order.total_amount,
        tracking_url=tracking_url
    )


@router.get("/track/{order_id}", response_model=TrackingResponse, summary="Track order")
def track_order(
    order_id: str,
    service: OrderService = Depends(get_order_service),
    settings: Settings = Depends(get_settings),
    clock=Depends(get_clock)
):
    """
    Customer tracking view of an order
    
    - **order_id**: Order ID from the tracking link
    """
    order = service.get_order_by_id(order_id)
    return tracking.project(order, clock(), settings.DISPLAY_TIMEZONE)
