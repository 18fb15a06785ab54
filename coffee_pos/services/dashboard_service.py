"""
Dashboard Service - today's order counts and sales
"""
from datetime import timedelta
from decimal import Decimal
from typing import Callable, Optional

from coffee_pos.repositories.document_store import DocumentStore
from coffee_pos.repositories.order_repository import OrderRepository
from coffee_pos.schemas.dashboard import DashboardStats
from coffee_pos.utils import resolve_timezone, utcnow

RECENT_ORDERS_LIMIT = 5


class DashboardService:
    """Aggregates over orders created since local midnight"""
    
    def __init__(self, store: DocumentStore, display_timezone: Optional[str] = None, clock: Callable = utcnow):
        self.repository = OrderRepository(store)
        self.display_timezone = display_timezone
        self.clock = clock
    
    def get_stats(self) -> DashboardStats:
        local_now = self.clock().astimezone(resolve_timezone(self.display_timezone))
        start = local_now.replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        
        orders = self.repository.get_created_between(start, end)
        delivered = [o for o in orders if o.status == "delivered"]
        
        return DashboardStats(
            today_orders=len(orders),
            total_sales=sum((o.total_amount for o in orders), Decimal("0")),
            pending_deliveries=len(orders) - len(delivered),
            completed_orders=len(delivered),
            recent_orders=orders[:RECENT_ORDERS_LIMIT]
        )
