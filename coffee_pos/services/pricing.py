"""
Pricing Engine - line totals, subtotal and order total
"""
from decimal import Decimal
from typing import Iterable, Tuple

from coffee_pos.schemas.common import quantize_money
from coffee_pos.schemas.order import Order, OrderItem


DEFAULT_UPSIZE_SURCHARGE = Decimal("10")


class PricingEngine:
    """
    Pure price calculations over order items
    
    Nothing here mutates its inputs. An order's stored subtotal and
    totalAmount are caches of these functions and are recomputed whenever
    items or delivery fee change.
    """
    
    def __init__(self, upsize_surcharge: Decimal = DEFAULT_UPSIZE_SURCHARGE):
        self.upsize_surcharge = Decimal(upsize_surcharge)
    
    def size_surcharge(self, size: str) -> Decimal:
        """Fixed surcharge for large drinks, zero for regular"""
        return self.upsize_surcharge if size == "large" else Decimal("0")
    
    def line_total(self, item: OrderItem) -> Decimal:
        """(unit price + size surcharge + add-ons) x quantity"""
        addons_total = sum((addon.price for addon in item.addons), Decimal("0"))
        unit_total = item.unit_price + self.size_surcharge(item.size) + addons_total
        return quantize_money(unit_total * item.quantity)
    
    def subtotal(self, items: Iterable[OrderItem]) -> Decimal:
        """Sum of line totals; zero for no items"""
        return quantize_money(sum((self.line_total(item) for item in items), Decimal("0")))
    
    def totals(self, items: Iterable[OrderItem], delivery_fee: Decimal) -> Tuple[Decimal, Decimal]:
        """Return (subtotal, total amount)"""
        subtotal = self.subtotal(items)
        return subtotal, quantize_money(subtotal + delivery_fee)
    
    def total(self, order: Order) -> Decimal:
        """Subtotal plus delivery fee, re-derived from the order's items"""
        return self.totals(order.items, order.delivery_fee)[1]
