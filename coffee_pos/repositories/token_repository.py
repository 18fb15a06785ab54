"""
Customer Token Repository - Data Access Layer
"""
from typing import List, Optional

from coffee_pos.repositories.base import DocumentRepository
from coffee_pos.schemas.token import CustomerToken


class CustomerTokenRepository(DocumentRepository[CustomerToken]):
    """Repository for the `customer-tokens` collection"""
    
    collection = "customer-tokens"
    schema = CustomerToken
    
    def get_by_token(self, token: str) -> Optional[CustomerToken]:
        """Exact-match lookup by token value"""
        tokens = self.find(where=[("token", "==", token)], limit=1)
        return tokens[0] if tokens else None
    
    def get_unused(self, created_by: Optional[str] = None) -> List[CustomerToken]:
        """Get tokens not yet used, optionally issued by one staff member"""
        where = [("isUsed", "==", False)]
        if created_by:
            where.append(("createdBy", "==", created_by))
        return self.find(where=where, order_by="createdAt", descending=True)
