"""
Pydantic schemas for orders
"""
from decimal import Decimal

from pydantic import Field
from typing import Optional, Literal, get_args

from coffee_pos.schemas.common import CamelModel, Money, NonNegativeMoney, Timestamp


OrderStatus = Literal["pending", "preparing", "ready", "out-for-delivery", "delivered"]
ItemSize = Literal["regular", "large"]

# Canonical lifecycle order
ORDER_STATUSES: tuple = get_args(OrderStatus)


class AddonSnapshot(CamelModel):
    """Add-on name and price copied onto an order item"""
    name: str = Field(..., min_length=1)
    price: NonNegativeMoney


class OrderItem(CamelModel):
    """One order line; product and add-on values are snapshots taken at order time"""
    product_id: str = Field(..., description="Product the line was made from")
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, description="Number of drinks on the line")
    unit_price: NonNegativeMoney = Field(..., description="Product price when added")
    size: ItemSize = Field("regular", description="Drink size")
    addons: list[AddonSnapshot] = Field(default_factory=list)
    drink_name: Optional[str] = Field(None, description="Label for the line, e.g. who it is for")


class OrderStatusChange(CamelModel):
    """Status history entry"""
    status: OrderStatus
    timestamp: Timestamp
    notes: Optional[str] = None


class CustomerDetails(CamelModel):
    """Who the order is for and where it goes"""
    customer_name: str = Field(..., max_length=255)
    customer_phone: str = Field(..., max_length=50)
    customer_address: str = Field(..., max_length=1000)


class Order(CustomerDetails):
    """Stored order"""
    id: str
    subtotal: Money
    delivery_fee: NonNegativeMoney = Decimal("0.00")
    total_amount: Money
    status: OrderStatus = "pending"
    created_at: Timestamp
    notes: Optional[str] = None
    items: list[OrderItem]
    status_history: list[OrderStatusChange] = Field(default_factory=list)
    estimated_delivery_time: Optional[Timestamp] = None
    tracking_notes: Optional[str] = None
    version: int = 1


class OrderCreate(CustomerDetails):
    """Schema for staff creating an order"""
    items: list[OrderItem]
    notes: Optional[str] = None


class OrderUpdate(CamelModel):
    """Staff correction of an order (all fields optional)"""
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=50)
    customer_address: Optional[str] = Field(None, max_length=1000)
    items: Optional[list[OrderItem]] = None
    delivery_fee: Optional[NonNegativeMoney] = None
    notes: Optional[str] = None
    estimated_delivery_time: Optional[Timestamp] = None
    tracking_notes: Optional[str] = None


class OrderStatusUpdate(CamelModel):
    """Schema for overriding order status"""
    status: OrderStatus = Field(..., description="Order status")
    notes: Optional[str] = None


class OrderListResponse(CamelModel):
    """Schema for list of orders response"""
    orders: list[Order]
    total: int


class ItemSelection(CamelModel):
    """A customer's pick from the menu, resolved to an OrderItem server-side"""
    product_id: str
    quantity: int = Field(1, ge=1)
    size: ItemSize = "regular"
    addon_ids: list[str] = Field(default_factory=list)
    drink_name: Optional[str] = None


class CustomerOrderSubmit(CustomerDetails):
    """Order placed through a customer link"""
    items: list[ItemSelection]
    notes: Optional[str] = None


class CustomerOrderResponse(CamelModel):
    """Result of a customer-link submission"""
    order_id: str
    status: OrderStatus
    total_amount: Money
    tracking_url: str
