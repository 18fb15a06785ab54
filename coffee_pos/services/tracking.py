"""
Order tracking - customer-facing labels, progress and delivery estimate

Everything here is read-only and derived from an Order.
"""
import math
from datetime import datetime
from typing import List, Optional

from coffee_pos.schemas.order import ORDER_STATUSES, Order
from coffee_pos.schemas.tracking import TimelineEntry, TrackingResponse
from coffee_pos.utils import ensure_utc, resolve_timezone, utcnow

STATUS_LABELS = {
    "pending": "Order Received",
    "preparing": "Preparing Your Order",
    "ready": "Ready for Pickup/Delivery",
    "out-for-delivery": "Out for Delivery",
    "delivered": "Delivered",
}

STATUS_PROGRESS = {
    "pending": 20,
    "preparing": 40,
    "ready": 60,
    "out-for-delivery": 80,
    "delivered": 100,
}

STATUS_MESSAGES = {
    "pending": "We'll start preparing your order soon",
    "preparing": "Your order is being prepared",
    "ready": "Your order is ready for pickup/delivery",
    "out-for-delivery": "Your order is on the way",
    "delivered": "Your order has been delivered",
}

DEFAULT_MESSAGE = "We're working on your order"

# ETAs further out than this are shown as a clock time
RELATIVE_ETA_LIMIT_MINUTES = 120


def display_label(status: str) -> str:
    return STATUS_LABELS.get(status, status)


def progress_percent(status: str) -> int:
    return STATUS_PROGRESS.get(status, 0)


def is_completed(candidate_status: str, current_status: str) -> bool:
    """
    True if candidate is at or before current in the lifecycle
    
    Based on position only, so a status skipped by a staff override still
    shows as completed.
    """
    return ORDER_STATUSES.index(candidate_status) <= ORDER_STATUSES.index(current_status)


def estimated_delivery_message(
    order: Order,
    now: Optional[datetime] = None,
    display_timezone: Optional[str] = None
) -> str:
    """
    Delivery estimate for the tracking page
    
    ETA up to two hours away -> minutes from now; further -> clock time;
    missing or past -> fixed message for the current status.
    """
    now = ensure_utc(now or utcnow())
    eta = order.estimated_delivery_time
    
    if eta is not None:
        diff_minutes = math.ceil((ensure_utc(eta) - now).total_seconds() / 60)
        if 0 < diff_minutes <= RELATIVE_ETA_LIMIT_MINUTES:
            return f"Estimated delivery in {diff_minutes} minutes"
        if diff_minutes > RELATIVE_ETA_LIMIT_MINUTES:
            local_eta = ensure_utc(eta).astimezone(resolve_timezone(display_timezone))
            return f"Estimated delivery at {local_eta:%H:%M}"
    
    return STATUS_MESSAGES.get(order.status, DEFAULT_MESSAGE)


def timeline(order: Order) -> List[TimelineEntry]:
    """Checklist of every status with completion and first-reached time"""
    entries = []
    for status in ORDER_STATUSES:
        reached = next((c for c in order.status_history if c.status == status), None)
        entries.append(TimelineEntry(
            status=status,
            label=display_label(status),
            completed=is_completed(status, order.status),
            current=status == order.status,
            timestamp=reached.timestamp if reached else None
        ))
    return entries


def tracking_url(public_origin: str, order_id: str) -> str:
    """Customer-facing tracking link for an order"""
    return f"{public_origin.rstrip('/')}/track/{order_id}"


def project(
    order: Order,
    now: Optional[datetime] = None,
    display_timezone: Optional[str] = None
) -> TrackingResponse:
    """Build the full tracking view of an order"""
    return TrackingResponse(
        order_id=order.id,
        status=order.status,
        label=display_label(order.status),
        progress=progress_percent(order.status),
        message=estimated_delivery_message(order, now, display_timezone),
        timeline=timeline(order),
        customer_name=order.customer_name,
        items=order.items,
        subtotal=order.subtotal,
        delivery_fee=order.delivery_fee,
        total_amount=order.total_amount,
        created_at=order.created_at,
        tracking_notes=order.tracking_notes
    )
