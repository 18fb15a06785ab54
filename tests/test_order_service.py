from decimal import Decimal

import pytest

from coffee_pos.exceptions import ConflictError, NotFoundError, ValidationError
from coffee_pos.schemas.order import CustomerDetails, OrderItem, OrderUpdate


def test_create_order_starts_pending(order_service, customer, latte_item, clock):
    order = order_service.create_order(customer, [latte_item], notes="  ring the bell ")
    
    assert order.id
    assert order.status == "pending"
    assert order.created_at == clock.now
    assert [c.status for c in order.status_history] == ["pending"]
    assert order.status_history[0].timestamp == clock.now
    assert order.subtotal == Decimal("300")
    assert order.delivery_fee == Decimal("0")
    assert order.total_amount == Decimal("300")
    assert order.notes == "ring the bell"


def test_created_order_round_trips_through_store(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    stored = order_service.get_order_by_id(order.id)
    
    assert stored.items == [latte_item]
    assert stored.customer_address == "12 Mabini St, Makati"
    assert stored.status_history == order.status_history


def test_create_order_requires_items(order_service, customer):
    with pytest.raises(ValidationError):
        order_service.create_order(customer, [])
    assert order_service.get_all_orders() == []


def test_create_order_requires_customer_details(order_service, latte_item):
    blank = CustomerDetails(customer_name="Maria", customer_phone="   ", customer_address="")
    with pytest.raises(ValidationError) as exc_info:
        order_service.create_order(blank, [latte_item])
    assert "customer_phone" in str(exc_info.value)
    assert "customer_address" in str(exc_info.value)
    assert order_service.get_all_orders() == []


def test_advance_four_times_reaches_delivered(order_service, customer, latte_item, clock):
    order = order_service.create_order(customer, [latte_item])
    for _ in range(4):
        clock.advance(minutes=5)
        order = order_service.advance_order(order)
    
    assert order.status == "delivered"
    assert [c.status for c in order.status_history] == [
        "pending", "preparing", "ready", "out-for-delivery", "delivered"
    ]
    stored = order_service.get_order_by_id(order.id)
    assert stored.status == "delivered"
    assert len(stored.status_history) == 5
    timestamps = [c.timestamp for c in stored.status_history]
    assert timestamps == sorted(timestamps)


def test_advance_delivered_is_noop(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    order = order_service.set_status(order, "delivered")
    
    again = order_service.advance_order(order)
    
    assert again.status == "delivered"
    assert len(again.status_history) == len(order.status_history)
    assert order_service.get_order_by_id(order.id).version == order.version


def test_set_status_allows_jumps_and_still_records_history(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    order = order_service.set_status(order, "out-for-delivery", notes="rider picked up")
    order = order_service.set_status(order, "preparing")
    
    stored = order_service.get_order_by_id(order.id)
    assert stored.status == "preparing"
    assert [c.status for c in stored.status_history] == ["pending", "out-for-delivery", "preparing"]
    assert stored.status_history[1].notes == "rider picked up"


def test_set_status_rejects_unknown_status(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    with pytest.raises(ValidationError):
        order_service.set_status(order, "cancelled")


def test_update_recomputes_totals(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    
    order = order_service.update_order(order, OrderUpdate(delivery_fee=Decimal("50")))
    assert order.subtotal == Decimal("300")
    assert order.total_amount == Decimal("350")
    
    americano = OrderItem(product_id="a", product_name="Americano", quantity=1, unit_price=Decimal("90"))
    order = order_service.update_order(order, OrderUpdate(items=[latte_item, americano]))
    assert order.subtotal == Decimal("390")
    assert order.total_amount == Decimal("440")
    
    stored = order_service.get_order_by_id(order.id)
    assert stored.total_amount == Decimal("440")
    assert stored.delivery_fee == Decimal("50")
    assert len(stored.items) == 2


def test_update_customer_details_and_eta(order_service, customer, latte_item, clock):
    order = order_service.create_order(customer, [latte_item])
    eta = clock.now.replace(hour=3)
    
    order = order_service.update_order(order, OrderUpdate(
        customer_address="  45 Rizal Ave, Pasig ",
        estimated_delivery_time=eta,
        tracking_notes="Rider: Jun"
    ))
    
    stored = order_service.get_order_by_id(order.id)
    assert stored.customer_address == "45 Rizal Ave, Pasig"
    assert stored.customer_name == "Maria Santos"
    assert stored.estimated_delivery_time == eta
    assert stored.tracking_notes == "Rider: Jun"


def test_update_rejects_empty_items(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    with pytest.raises(ValidationError):
        order_service.update_order(order, OrderUpdate(items=[]))
    assert order_service.get_order_by_id(order.id).items == [latte_item]


def test_update_rejects_blank_customer_name(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    with pytest.raises(ValidationError):
        order_service.update_order(order, OrderUpdate(customer_name="  "))


def test_stale_order_write_conflicts(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    first_reader = order_service.get_order_by_id(order.id)
    second_reader = order_service.get_order_by_id(order.id)
    
    order_service.advance_order(first_reader)
    with pytest.raises(ConflictError):
        order_service.advance_order(second_reader)
    
    stored = order_service.get_order_by_id(order.id)
    assert [c.status for c in stored.status_history] == ["pending", "preparing"]


def test_delete_order(order_service, customer, latte_item):
    order = order_service.create_order(customer, [latte_item])
    order_service.delete_order(order.id)
    
    with pytest.raises(NotFoundError):
        order_service.get_order_by_id(order.id)
    with pytest.raises(NotFoundError):
        order_service.delete_order(order.id)


def test_get_all_orders_newest_first_and_by_status(order_service, customer, latte_item, clock):
    first = order_service.create_order(customer, [latte_item])
    clock.advance(minutes=1)
    second = order_service.create_order(customer, [latte_item])
    order_service.advance_order(second)
    
    assert [o.id for o in order_service.get_all_orders()] == [second.id, first.id]
    assert [o.id for o in order_service.get_all_orders(status="pending")] == [first.id]
    assert [o.id for o in order_service.get_all_orders(status="preparing")] == [second.id]
