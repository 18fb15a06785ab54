"""
Menu Service - products, add-ons and turning menu picks into order items
"""
import logging
from typing import Callable, List, Optional

from coffee_pos.exceptions import NotFoundError, ValidationError
from coffee_pos.repositories.document_store import DocumentStore
from coffee_pos.repositories.product_repository import AddonRepository, ProductRepository
from coffee_pos.schemas.order import AddonSnapshot, ItemSelection, OrderItem
from coffee_pos.schemas.product import (
    Addon,
    AddonCreate,
    AddonUpdate,
    MenuResponse,
    Product,
    ProductCreate,
    ProductUpdate
)
from coffee_pos.utils import format_timestamp, utcnow

logger = logging.getLogger(__name__)


class MenuService:
    """Service layer for menu management"""
    
    def __init__(self, store: DocumentStore, clock: Callable = utcnow):
        self.products = ProductRepository(store)
        self.addons = AddonRepository(store)
        self.clock = clock
    
    def get_menu(self, available_only: bool = True) -> MenuResponse:
        """Products and add-ons, by default only the available ones"""
        return MenuResponse(
            products=self.products.get_all(available_only=available_only),
            addons=self.addons.get_all(available_only=available_only)
        )
    
    def get_all_products(self, available_only: bool = False, category: Optional[str] = None) -> List[Product]:
        """Get products sorted by name"""
        return self.products.get_all(available_only=available_only, category=category)
    
    def get_product_by_id(self, product_id: str) -> Product:
        """
        Get product by ID
        
        Raises:
            NotFoundError: If product does not exist
        """
        product = self.products.get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product {product_id} not found")
        return product
    
    def create_product(self, product_data: ProductCreate) -> Product:
        """Create new product"""
        now = format_timestamp(self.clock())
        product = self.products.create({
            **self.products.encode(product_data),
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info("Product %s created: %s", product.id, product.name)
        return product
    
    def update_product(self, product_id: str, product_data: ProductUpdate) -> Product:
        """
        Update existing product; only provided fields change
        
        Fields sent as null are ignored.
        
        Raises:
            NotFoundError: If product does not exist
            ValidationError: If the updated product would be invalid
        """
        changes = self.products.encode(product_data, exclude_unset=True, exclude_none=True)
        changes["updatedAt"] = format_timestamp(self.clock())
        product = self.products.patch(product_id, changes)
        logger.info("Product %s updated", product_id)
        return product
    
    def delete_product(self, product_id: str) -> None:
        """Delete product; existing orders keep their snapshots"""
        self.products.delete(product_id)
        logger.info("Product %s deleted", product_id)
    
    def get_all_addons(self, available_only: bool = False) -> List[Addon]:
        """Get add-ons sorted by name"""
        return self.addons.get_all(available_only=available_only)
    
    def get_addon_by_id(self, addon_id: str) -> Addon:
        """
        Get add-on by ID
        
        Raises:
            NotFoundError: If add-on does not exist
        """
        addon = self.addons.get_by_id(addon_id)
        if not addon:
            raise NotFoundError(f"Add-on {addon_id} not found")
        return addon
    
    def create_addon(self, addon_data: AddonCreate) -> Addon:
        """Create new add-on"""
        addon = self.addons.create(self.addons.encode(addon_data))
        logger.info("Add-on %s created: %s", addon.id, addon.name)
        return addon
    
    def update_addon(self, addon_id: str, addon_data: AddonUpdate) -> Addon:
        """Update existing add-on; fields sent as null are ignored"""
        return self.addons.patch(
            addon_id, self.addons.encode(addon_data, exclude_unset=True, exclude_none=True)
        )
    
    def delete_addon(self, addon_id: str) -> None:
        """Delete add-on"""
        self.addons.delete(addon_id)
        logger.info("Add-on %s deleted", addon_id)
    
    def build_order_items(self, selections: List[ItemSelection]) -> List[OrderItem]:
        """
        Resolve menu picks into order items
        
        Prices and names are copied from the current menu; later menu edits
        do not touch the order.
        
        Raises:
            NotFoundError: If a product or add-on does not exist
            ValidationError: If a product or add-on is unavailable
        """
        items = []
        for selection in selections:
            product = self.get_product_by_id(selection.product_id)
            if not product.available:
                raise ValidationError(f"{product.name} is not available")
            
            addons = []
            for addon_id in selection.addon_ids:
                addon = self.get_addon_by_id(addon_id)
                if not addon.available:
                    raise ValidationError(f"{addon.name} is not available")
                addons.append(AddonSnapshot(name=addon.name, price=addon.price))
            
            items.append(OrderItem(
                product_id=product.id,
                product_name=product.name,
                quantity=selection.quantity,
                unit_price=product.base_price,
                size=selection.size,
                addons=addons,
                drink_name=(selection.drink_name or "").strip() or None
            ))
        return items
