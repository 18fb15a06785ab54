"""
Pydantic schemas for customer order tracking
"""
from typing import Optional

from coffee_pos.schemas.common import CamelModel, Money, Timestamp
from coffee_pos.schemas.order import OrderItem, OrderStatus


class TimelineEntry(CamelModel):
    """One step of the tracking checklist"""
    status: OrderStatus
    label: str
    completed: bool
    current: bool
    timestamp: Optional[Timestamp] = None


class TrackingResponse(CamelModel):
    """Customer-facing view of an order"""
    order_id: str
    status: OrderStatus
    label: str
    progress: int
    message: str
    timeline: list[TimelineEntry]
    customer_name: str
    items: list[OrderItem]
    subtotal: Money
    delivery_fee: Money
    total_amount: Money
    created_at: Timestamp
    tracking_notes: Optional[str] = None
