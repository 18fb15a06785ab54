"""
Menu API endpoints: products and add-ons
"""
from fastapi import APIRouter, Depends, status, Query
from typing import List, Optional

from coffee_pos.api.deps import get_current_staff, get_menu_service
from coffee_pos.schemas.product import (
    Addon,
    AddonCreate,
    AddonUpdate,
    MenuResponse,
    Product,
    ProductCategory,
    ProductCreate,
    ProductUpdate
)
from coffee_pos.services.menu_service import MenuService

router = APIRouter(tags=["menu"])

staff_only = [Depends(get_current_staff)]


@router.get("/menu", response_model=MenuResponse, summary="Get available menu")
def get_menu(service: MenuService = Depends(get_menu_service)):
    """Available products and add-ons, for the customer order form"""
    return service.get_menu(available_only=True)


@router.get("/products", response_model=List[Product], summary="Get all products", dependencies=staff_only)
def get_products(
    available_only: bool = Query(False, description="Only products shown on the menu"),
    category: Optional[ProductCategory] = Query(None, description="Filter by category"),
    service: MenuService = Depends(get_menu_service)
):
    """
    Retrieve products sorted by name
    
    - **available_only**: Skip unavailable products (default: false)
    - **category**: espresso-based or no-caffeine
    """
    return service.get_all_products(available_only=available_only, category=category)


@router.get("/products/{product_id}", response_model=Product, summary="Get product by ID", dependencies=staff_only)
def get_product(product_id: str, service: MenuService = Depends(get_menu_service)):
    """
    Retrieve a specific product by ID
    
    - **product_id**: Product ID
    """
    return service.get_product_by_id(product_id)


@router.post(
    "/products",
    response_model=Product,
    status_code=status.HTTP_201_CREATED,
    summary="Create product",
    dependencies=staff_only
)
def create_product(product_data: ProductCreate, service: MenuService = Depends(get_menu_service)):
    """
    Create a new product
    
    - **name**: Product name (required)
    - **basePrice**: Price in pesos (required, must be positive)
    - **category**: espresso-based or no-caffeine (required)
    - **available**: Shown on the menu (default: true)
    - **description**: Product description (optional)
    """
    return service.create_product(product_data)


@router.put("/products/{product_id}", response_model=Product, summary="Update product", dependencies=staff_only)
def update_product(
    product_id: str,
    product_data: ProductUpdate,
    service: MenuService = Depends(get_menu_service)
):
    """
    Update an existing product
    
    All fields are optional. Only provided fields will be updated.
    """
    return service.update_product(product_id, product_data)


@router.delete(
    "/products/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete product",
    dependencies=staff_only
)
def delete_product(product_id: str, service: MenuService = Depends(get_menu_service)):
    """Delete a product"""
    service.delete_product(product_id)
    return None


@router.get("/addons", response_model=List[Addon], summary="Get all add-ons", dependencies=staff_only)
def get_addons(
    available_only: bool = Query(False, description="Only add-ons offered on the menu"),
    service: MenuService = Depends(get_menu_service)
):
    """Retrieve add-ons sorted by name"""
    return service.get_all_addons(available_only=available_only)


@router.post(
    "/addons",
    response_model=Addon,
    status_code=status.HTTP_201_CREATED,
    summary="Create add-on",
    dependencies=staff_only
)
def create_addon(addon_data: AddonCreate, service: MenuService = Depends(get_menu_service)):
    """
    Create a new add-on
    
    - **name**: Add-on name (required)
    - **price**: Price in pesos (required, non-negative)
    - **type**: shot or syrup (required)
    """
    return service.create_addon(addon_data)


@router.put("/addons/{addon_id}", response_model=Addon, summary="Update add-on", dependencies=staff_only)
def update_addon(
    addon_id: str,
    addon_data: AddonUpdate,
    service: MenuService = Depends(get_menu_service)
):
    """Update an existing add-on; only provided fields are changed"""
    return service.update_addon(addon_id, addon_data)


@router.delete(
    "/addons/{addon_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete add-on",
    dependencies=staff_only
)
def delete_addon(addon_id: str, service: MenuService = Depends(get_menu_service)):
    """Delete an add-on"""
    service.delete_addon(addon_id)
    return None
