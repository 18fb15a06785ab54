"""
Pydantic schemas for menu products and add-ons
"""
from pydantic import Field
from typing import Optional, Literal

from coffee_pos.schemas.common import CamelModel, NonNegativeMoney, PositiveMoney, Timestamp


ProductCategory = Literal["espresso-based", "no-caffeine"]
AddonType = Literal["shot", "syrup"]


class ProductBase(CamelModel):
    """Base Product schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Product name")
    base_price: PositiveMoney = Field(..., description="Base price in pesos (must be positive)")
    category: ProductCategory = Field(..., description="Menu category")
    available: bool = Field(True, description="Shown on the menu")
    description: str = Field("", description="Product description")


class ProductCreate(ProductBase):
    """Schema for creating a new product"""
    pass


class ProductUpdate(CamelModel):
    """Schema for updating a product (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    base_price: Optional[PositiveMoney] = None
    category: Optional[ProductCategory] = None
    available: Optional[bool] = None
    description: Optional[str] = None


class Product(ProductBase):
    """Stored product"""
    id: str
    created_at: Timestamp
    updated_at: Timestamp


class AddonBase(CamelModel):
    """Base Addon schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Add-on name")
    price: NonNegativeMoney = Field(..., description="Price in pesos (non-negative)")
    type: AddonType = Field(..., description="Add-on type")
    available: bool = Field(True, description="Offered on the menu")


class AddonCreate(AddonBase):
    """Schema for creating a new add-on"""
    pass


class AddonUpdate(CamelModel):
    """Schema for updating an add-on (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    price: Optional[NonNegativeMoney] = None
    type: Optional[AddonType] = None
    available: Optional[bool] = None


class Addon(AddonBase):
    """Stored add-on"""
    id: str


class MenuResponse(CamelModel):
    """Products and add-ons offered to customers"""
    products: list[Product]
    addons: list[Addon]
