"""
Pydantic schemas for the staff dashboard
"""
from coffee_pos.schemas.common import CamelModel, Money
from coffee_pos.schemas.order import Order


class DashboardStats(CamelModel):
    """Today's order counts and sales"""
    today_orders: int
    total_sales: Money
    pending_deliveries: int
    completed_orders: int
    recent_orders: list[Order]
