"""
Order Service - order lifecycle and status history
"""
import logging
from decimal import Decimal
from typing import Callable, Dict, List, Optional

from coffee_pos.exceptions import NotFoundError, ValidationError
from coffee_pos.repositories.document_store import DocumentStore
from coffee_pos.repositories.order_repository import OrderRepository
from coffee_pos.schemas.order import (
    ORDER_STATUSES,
    CustomerDetails,
    Order,
    OrderItem,
    OrderStatusChange,
    OrderUpdate
)
from coffee_pos.services.pricing import PricingEngine
from coffee_pos.utils import format_timestamp, utcnow

logger = logging.getLogger(__name__)

# Standard advance path; delivered has no next state
NEXT_STATUS: Dict[str, Optional[str]] = {
    "pending": "preparing",
    "preparing": "ready",
    "ready": "out-for-delivery",
    "out-for-delivery": "delivered",
    "delivered": None,
}

CUSTOMER_FIELDS = ("customer_name", "customer_phone", "customer_address")


class OrderService:
    """
    Service layer for the order lifecycle
    
    Writes are version-checked against the order the caller read, so two
    staff members changing the same order cannot silently drop each
    other's status history or item edits; the loser gets ConflictError.
    """
    
    def __init__(
        self,
        store: DocumentStore,
        pricing: Optional[PricingEngine] = None,
        clock: Callable = utcnow
    ):
        self.repository = OrderRepository(store)
        self.pricing = pricing or PricingEngine()
        self.clock = clock
    
    @staticmethod
    def _clean_customer_details(values: Dict[str, Optional[str]]) -> Dict[str, str]:
        """Strip customer fields, rejecting blank ones"""
        cleaned = {}
        missing = []
        for name, value in values.items():
            value = (value or "").strip()
            if not value:
                missing.append(name)
            cleaned[name] = value
        if missing:
            raise ValidationError(f"Missing required customer details: {', '.join(missing)}")
        return cleaned
    
    def get_all_orders(self, status: Optional[str] = None) -> List[Order]:
        """Get orders newest first, optionally filtered by status"""
        if status:
            return self.repository.get_by_status(status)
        return self.repository.get_all()
    
    def get_order_by_id(self, order_id: str) -> Order:
        """
        Get order by ID
        
        Raises:
            NotFoundError: If order does not exist
        """
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFoundError(f"Order {order_id} not found")
        return order
    
    def create_order(
        self,
        customer: CustomerDetails,
        items: List[OrderItem],
        notes: Optional[str] = None
    ) -> Order:
        """
        Create new order in `pending` with its first status history entry
        
        Args:
            customer: Customer name, phone and address (all required)
            items: Order lines (at least one)
            notes: Optional order notes
        
        Returns:
            Created order
        
        Raises:
            ValidationError: If items are empty or customer details blank
        """
        if not items:
            raise ValidationError("Order must contain at least one item")
        details = self._clean_customer_details({
            name: getattr(customer, name) for name in CUSTOMER_FIELDS
        })
        
        now = self.clock()
        subtotal, total_amount = self.pricing.totals(items, Decimal("0"))
        first_change = OrderStatusChange(status="pending", timestamp=now)
        
        order_data = {
            "customerName": details["customer_name"],
            "customerPhone": details["customer_phone"],
            "customerAddress": details["customer_address"],
            "subtotal": str(subtotal),
            "deliveryFee": "0.00",
            "totalAmount": str(total_amount),
            "status": "pending",
            "createdAt": format_timestamp(now),
            "notes": (notes or "").strip() or None,
            "items": [self.repository.encode(item) for item in items],
            "statusHistory": [self.repository.encode(first_change)],
        }
        
        order = self.repository.create(order_data)
        logger.info("Order %s created for %s, total %s", order.id, order.customer_name, order.total_amount)
        return order
    
    def _record_status(self, order: Order, status: str, notes: Optional[str] = None) -> Order:
        change = OrderStatusChange(status=status, timestamp=self.clock(), notes=notes)
        history = [*order.status_history, change]
        
        version = self.repository.update(
            order.id,
            {
                "status": status,
                "statusHistory": [self.repository.encode(c) for c in history],
            },
            expected_version=order.version
        )
        logger.info("Order %s status %s -> %s", order.id, order.status, status)
        return order.model_copy(update={
            "status": status,
            "status_history": history,
            "version": version,
        })
    
    def advance_order(self, order: Order) -> Order:
        """
        Move order one step along the standard path
        
        A delivered order has no next state and is returned unchanged.
        """
        next_status = NEXT_STATUS[order.status]
        if next_status is None:
            logger.debug("Order %s already %s; nothing to advance", order.id, order.status)
            return order
        return self._record_status(order, next_status)
    
    def set_status(self, order: Order, new_status: str, notes: Optional[str] = None) -> Order:
        """
        Staff override: set any status, skipping or going backwards
        
        Still appends to the status history.
        
        Raises:
            ValidationError: If status is not a known order status
        """
        if new_status not in ORDER_STATUSES:
            raise ValidationError(f"Unknown order status: {new_status}")
        return self._record_status(order, new_status, notes)
    
    def update_order(self, order: Order, patch: OrderUpdate) -> Order:
        """
        Apply staff corrections and recompute totals
        
        Args:
            order: Order as last read
            patch: Fields to change; customer fields, items and delivery fee
                are ignored when sent as null
        
        Returns:
            Updated order
        
        Raises:
            ValidationError: If items would become empty or a customer field blank
        """
        changes = {
            name: value
            for name, value in patch.model_dump(exclude_unset=True).items()
            if value is not None or name in ("notes", "estimated_delivery_time", "tracking_notes")
        }
        
        if "items" in changes and not changes["items"]:
            raise ValidationError("Order must contain at least one item")
        customer_changes = {k: changes[k] for k in CUSTOMER_FIELDS if k in changes}
        changes.update(self._clean_customer_details(customer_changes))
        
        merged = {**order.model_dump(), **changes}
        items = [OrderItem.model_validate(item) for item in merged["items"]]
        merged["subtotal"], merged["total_amount"] = self.pricing.totals(
            items, Decimal(merged["delivery_fee"])
        )
        updated = Order.model_validate(merged)
        
        version = self.repository.update(
            order.id,
            self.repository.encode(updated, exclude={"id", "version"}),
            expected_version=order.version
        )
        logger.info("Order %s updated (%s)", order.id, ", ".join(sorted(changes)) or "no changes")
        return updated.model_copy(update={"version": version})
    
    def delete_order(self, order_id: str) -> None:
        """
        Delete order permanently
        
        Raises:
            NotFoundError: If order does not exist
        """
        self.repository.delete(order_id)
        logger.info("Order %s deleted", order_id)
