"""
Product and Add-on Repositories - Data Access Layer
"""
from typing import List, Optional

from coffee_pos.repositories.base import DocumentRepository
from coffee_pos.schemas.product import Addon, Product


class ProductRepository(DocumentRepository[Product]):
    """Repository for the `products` collection"""
    
    collection = "products"
    schema = Product
    
    def get_all(self, available_only: bool = False, category: Optional[str] = None) -> List[Product]:
        """Get products sorted by name"""
        where = []
        if available_only:
            where.append(("available", "==", True))
        if category:
            where.append(("category", "==", category))
        return self.find(where=where, order_by="name")


class AddonRepository(DocumentRepository[Addon]):
    """Repository for the `addons` collection"""
    
    collection = "addons"
    schema = Addon
    
    def get_all(self, available_only: bool = False) -> List[Addon]:
        """Get add-ons sorted by name"""
        where = [("available", "==", True)] if available_only else []
        return self.find(where=where, order_by="name")
