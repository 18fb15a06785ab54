"""
Order Repository - Data Access Layer
"""
from datetime import datetime
from typing import List, Optional

from coffee_pos.repositories.base import DocumentRepository
from coffee_pos.schemas.order import Order


class OrderRepository(DocumentRepository[Order]):
    """Repository for the `orders` collection"""
    
    collection = "orders"
    schema = Order
    
    def get_all(self, limit: Optional[int] = None) -> List[Order]:
        """Get all orders, newest first"""
        return self.find(order_by="createdAt", descending=True, limit=limit)
    
    def get_by_status(self, status: str) -> List[Order]:
        """Get orders by status, newest first"""
        return self.find(
            where=[("status", "==", status)],
            order_by="createdAt",
            descending=True
        )
    
    def get_created_between(self, start: datetime, end: datetime) -> List[Order]:
        """Get orders created in [start, end), newest first"""
        return self.find(
            where=[("createdAt", ">=", start), ("createdAt", "<", end)],
            order_by="createdAt",
            descending=True
        )
