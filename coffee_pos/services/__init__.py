"""
Services package
"""
from coffee_pos.services.pricing import PricingEngine
from coffee_pos.services.order_service import OrderService
from coffee_pos.services.token_service import CustomerTokenService
from coffee_pos.services.menu_service import MenuService
from coffee_pos.services.customer_order_service import CustomerOrderService
from coffee_pos.services.dashboard_service import DashboardService
from coffee_pos.services.auth_service import StaffAuthService

__all__ = [
    "PricingEngine",
    "OrderService",
    "CustomerTokenService",
    "MenuService",
    "CustomerOrderService",
    "DashboardService",
    "StaffAuthService"
]
