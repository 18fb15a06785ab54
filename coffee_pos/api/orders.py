"""
Order API endpoints (staff)
"""
from fastapi import APIRouter, Depends, Header, HTTPException, status, Query
from typing import Optional

from coffee_pos.api.deps import get_current_staff, get_order_service
from coffee_pos.schemas.order import (
    CustomerDetails,
    Order,
    OrderCreate,
    OrderListResponse,
    OrderStatus,
    OrderStatusUpdate,
    OrderUpdate
)
from coffee_pos.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"], dependencies=[Depends(get_current_staff)])


def load_order(
    order_id: str,
    if_match: Optional[str] = Header(None, description="Order version the client last saw"),
    service: OrderService = Depends(get_order_service)
) -> Order:
    """Fetch the order, rejecting stale client versions with 409"""
    order = service.get_order_by_id(order_id)
    if if_match is not None and if_match.strip('"') != str(order.version):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Order {order_id} is at version {order.version}"
        )
    return order


@router.get("", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    status_filter: Optional[OrderStatus] = Query(None, alias="status", description="Only orders in this status"),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders, newest first
    
    - **status**: Filter by order status (optional)
    """
    orders = service.get_all_orders(status=status_filter)
    return OrderListResponse(orders=orders, total=len(orders))


@router.get("/{order_id}", response_model=Order, summary="Get order by ID")
def get_order(order: Order = Depends(load_order)):
    """
    Retrieve a specific order by ID
    
    - **order_id**: Order ID
    """
    return order


@router.post("", response_model=Order, status_code=status.HTTP_201_CREATED, summary="Create order")
def create_order(order_data: OrderCreate, service: OrderService = Depends(get_order_service)):
    """
    Create a new order in `pending`
    
    - **customerName**, **customerPhone**, **customerAddress**: required
    - **items**: at least one line
    - **notes**: optional
    """
    customer = CustomerDetails(
        customer_name=order_data.customer_name,
        customer_phone=order_data.customer_phone,
        customer_address=order_data.customer_address
    )
    return service.create_order(customer, order_data.items, order_data.notes)


@router.patch("/{order_id}", response_model=Order, summary="Update order")
def update_order(
    patch: OrderUpdate,
    order: Order = Depends(load_order),
    service: OrderService = Depends(get_order_service)
):
    """
    Correct customer details, items, delivery fee, ETA or notes
    
    Subtotal and total are recomputed from the resulting items and fee.
    """
    return service.update_order(order, patch)


@router.post("/{order_id}/advance", response_model=Order, summary="Advance order status")
def advance_order(
    order: Order = Depends(load_order),
    service: OrderService = Depends(get_order_service)
):
    """
    Move the order to the next status
    
    pending -> preparing -> ready -> out-for-delivery -> delivered.
    A delivered order is returned unchanged.
    """
    return service.advance_order(order)


@router.patch("/{order_id}/status", response_model=Order, summary="Set order status")
def set_order_status(
    status_data: OrderStatusUpdate,
    order: Order = Depends(load_order),
    service: OrderService = Depends(get_order_service)
):
    """
    Set any status directly (staff override)
    
    - **status**: pending, preparing, ready, out-for-delivery or delivered
    - **notes**: optional note for the status history
    """
    return service.set_status(order, status_data.status, status_data.notes)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete order")
def delete_order(order_id: str, service: OrderService = Depends(get_order_service)):
    """Delete an order permanently"""
    service.delete_order(order_id)
    return None
