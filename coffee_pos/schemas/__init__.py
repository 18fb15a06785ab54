"""
Schemas package
"""
from coffee_pos.schemas.order import (
    ORDER_STATUSES,
    AddonSnapshot,
    OrderItem,
    OrderStatusChange,
    CustomerDetails,
    Order,
    OrderCreate,
    OrderUpdate,
    OrderStatusUpdate,
    OrderListResponse,
    ItemSelection,
    CustomerOrderSubmit,
    CustomerOrderResponse
)
from coffee_pos.schemas.product import (
    Product,
    ProductCreate,
    ProductUpdate,
    Addon,
    AddonCreate,
    AddonUpdate,
    MenuResponse
)
from coffee_pos.schemas.token import (
    TokenPrefill,
    CustomerToken,
    TokenIssueRequest,
    TokenIssueResponse,
    TokenValidation,
    CustomerLinkResponse
)
from coffee_pos.schemas.tracking import TimelineEntry, TrackingResponse
from coffee_pos.schemas.dashboard import DashboardStats
from coffee_pos.schemas.auth import (
    StaffUser,
    StaffUserRecord,
    StaffRegister,
    SignInRequest,
    SessionResponse
)

__all__ = [
    "ORDER_STATUSES",
    "AddonSnapshot",
    "OrderItem",
    "OrderStatusChange",
    "CustomerDetails",
    "Order",
    "OrderCreate",
    "OrderUpdate",
    "OrderStatusUpdate",
    "OrderListResponse",
    "ItemSelection",
    "CustomerOrderSubmit",
    "CustomerOrderResponse",
    "Product",
    "ProductCreate",
    "ProductUpdate",
    "Addon",
    "AddonCreate",
    "AddonUpdate",
    "MenuResponse",
    "TokenPrefill",
    "CustomerToken",
    "TokenIssueRequest",
    "TokenIssueResponse",
    "TokenValidation",
    "CustomerLinkResponse",
    "TimelineEntry",
    "TrackingResponse",
    "DashboardStats",
    "StaffUser",
    "StaffUserRecord",
    "StaffRegister",
    "SignInRequest",
    "SessionResponse"
]
