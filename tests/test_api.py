from decimal import Decimal

import pytest


@pytest.fixture
def menu_ids(client, staff_headers):
    latte = client.post("/products", headers=staff_headers, json={
        "name": "Spanish Latte", "basePrice": 120, "category": "espresso-based"
    })
    assert latte.status_code == 201
    shot = client.post("/addons", headers=staff_headers, json={
        "name": "Extra Shot", "price": 20, "type": "shot"
    })
    assert shot.status_code == 201
    return latte.json()["id"], shot.json()["id"]


def order_payload():
    return {
        "customerName": "Maria Santos",
        "customerPhone": "0917 555 0101",
        "customerAddress": "12 Mabini St, Makati",
        "items": [{
            "productId": "latte",
            "productName": "Spanish Latte",
            "quantity": 2,
            "unitPrice": 120,
            "size": "large",
            "addons": [{"name": "Extra Shot", "price": 20}]
        }]
    }


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["database"] == "healthy"


def test_staff_routes_require_sign_in(client):
    assert client.get("/orders").status_code == 401
    assert client.post("/tokens", json={}).status_code == 401
    assert client.get("/dashboard/stats").status_code == 401
    assert client.get("/orders", headers={"Authorization": "Bearer garbage"}).status_code == 401


def test_sign_in_wrong_password(client, staff_headers):
    response = client.post("/auth/sign-in", json={"email": "barista@buzzcoffee.ph", "password": "latte-123"})
    assert response.status_code == 401


def test_me_and_sign_out(client, staff_headers):
    me = client.get("/auth/me", headers=staff_headers)
    assert me.status_code == 200
    assert me.json()["email"] == "barista@buzzcoffee.ph"
    assert "passwordHash" not in me.json()
    
    assert client.post("/auth/sign-out", headers=staff_headers).status_code == 204
    assert client.get("/auth/me", headers=staff_headers).status_code == 401


def test_order_lifecycle(client, staff_headers):
    created = client.post("/orders", headers=staff_headers, json=order_payload())
    assert created.status_code == 201
    order = created.json()
    assert order["status"] == "pending"
    assert Decimal(order["subtotal"]) == Decimal("300")
    assert Decimal(order["totalAmount"]) == Decimal("300")
    assert len(order["statusHistory"]) == 1
    
    patched = client.patch(f"/orders/{order['id']}", headers=staff_headers, json={"deliveryFee": 50})
    assert patched.status_code == 200
    assert Decimal(patched.json()["totalAmount"]) == Decimal("350")
    
    for expected in ("preparing", "ready", "out-for-delivery", "delivered", "delivered"):
        advanced = client.post(f"/orders/{order['id']}/advance", headers=staff_headers)
        assert advanced.status_code == 200
        assert advanced.json()["status"] == expected
    assert [c["status"] for c in advanced.json()["statusHistory"]] == [
        "pending", "preparing", "ready", "out-for-delivery", "delivered"
    ]
    
    listed = client.get("/orders", headers=staff_headers, params={"status": "delivered"})
    assert listed.json()["total"] == 1
    
    assert client.delete(f"/orders/{order['id']}", headers=staff_headers).status_code == 204
    assert client.get(f"/orders/{order['id']}", headers=staff_headers).status_code == 404
    assert client.delete(f"/orders/{order['id']}", headers=staff_headers).status_code == 404


def test_create_order_validation(client, staff_headers):
    payload = order_payload()
    payload["items"] = []
    assert client.post("/orders", headers=staff_headers, json=payload).status_code == 422
    
    payload = order_payload()
    payload["customerAddress"] = "   "
    assert client.post("/orders", headers=staff_headers, json=payload).status_code == 422
    assert client.get("/orders", headers=staff_headers).json()["total"] == 0


def test_status_override_and_stale_version(client, staff_headers):
    order = client.post("/orders", headers=staff_headers, json=order_payload()).json()
    
    overridden = client.patch(
        f"/orders/{order['id']}/status",
        headers={**staff_headers, "If-Match": str(order["version"])},
        json={"status": "out-for-delivery", "notes": "rush"}
    )
    assert overridden.status_code == 200
    assert overridden.json()["status"] == "out-for-delivery"
    
    stale = client.patch(
        f"/orders/{order['id']}/status",
        headers={**staff_headers, "If-Match": str(order["version"])},
        json={"status": "delivered"}
    )
    assert stale.status_code == 409
    
    unknown = client.patch(f"/orders/{order['id']}/status", headers=staff_headers, json={"status": "lost"})
    assert unknown.status_code == 422


def test_customer_link_flow(client, staff_headers, menu_ids):
    latte_id, shot_id = menu_ids
    issued = client.post("/tokens", headers=staff_headers, json={"customerName": "Maria"})
    assert issued.status_code == 201
    token = issued.json()["token"]
    assert issued.json()["link"] == f"https://buzz.example/customer/{token}"
    
    active = client.get("/tokens/active", headers=staff_headers, params={"mine": True})
    assert [t["token"] for t in active.json()] == [token]
    
    opened = client.get(f"/customer/{token}")
    assert opened.status_code == 200
    assert opened.json()["valid"] is True
    assert opened.json()["prefill"]["customerName"] == "Maria"
    
    menu = client.get("/menu").json()
    assert [p["id"] for p in menu["products"]] == [latte_id]
    
    submission = {
        "customerName": "Maria",
        "customerPhone": "0917 555 0101",
        "customerAddress": "12 Mabini St",
        "items": [{"productId": latte_id, "quantity": 2, "size": "large", "addonIds": [shot_id]}]
    }
    placed = client.post(f"/customer/{token}/orders", json=submission)
    assert placed.status_code == 201
    body = placed.json()
    assert Decimal(body["totalAmount"]) == Decimal("300")
    assert body["trackingUrl"] == f"https://buzz.example/track/{body['orderId']}"
    
    again = client.post(f"/customer/{token}/orders", json=submission)
    assert again.status_code == 422
    assert client.get(f"/customer/{token}").json() == {
        "valid": False, "reason": "already used", "prefill": None, "expiresAt": None
    }
    assert client.get("/tokens/active", headers=staff_headers).json() == []
    
    tracked = client.get(f"/track/{body['orderId']}")
    assert tracked.status_code == 200
    assert tracked.json()["progress"] == 20
    assert tracked.json()["label"] == "Order Received"
    assert tracked.json()["message"] == "We'll start preparing your order soon"


def test_unknown_customer_link(client):
    assert client.get("/customer/nope").json()["reason"] == "not found"
    response = client.post("/customer/nope/orders", json={
        "customerName": "A", "customerPhone": "1", "customerAddress": "B",
        "items": [{"productId": "x"}]
    })
    assert response.status_code == 404


def test_expired_customer_link(client, staff_headers, api_clock):
    token = client.post("/tokens", headers=staff_headers, json={"ttlHours": 48}).json()["token"]
    api_clock.advance(hours=49)
    assert client.get(f"/customer/{token}").json()["reason"] == "expired"


def test_track_unknown_order(client):
    assert client.get("/track/missing").status_code == 404


def test_dashboard_stats(client, staff_headers):
    first = client.post("/orders", headers=staff_headers, json=order_payload()).json()
    client.post("/orders", headers=staff_headers, json=order_payload())
    client.patch(f"/orders/{first['id']}/status", headers=staff_headers, json={"status": "delivered"})
    
    stats = client.get("/dashboard/stats", headers=staff_headers)
    
    assert stats.status_code == 200
    body = stats.json()
    assert body["todayOrders"] == 2
    assert Decimal(body["totalSales"]) == Decimal("600")
    assert body["pendingDeliveries"] == 1
    assert body["completedOrders"] == 1
    assert len(body["recentOrders"]) == 2


def test_product_crud(client, staff_headers):
    created = client.post("/products", headers=staff_headers, json={
        "name": "Cold Brew", "basePrice": 110, "category": "espresso-based"
    }).json()
    
    updated = client.put(f"/products/{created['id']}", headers=staff_headers, json={"available": False})
    assert updated.status_code == 200
    assert updated.json()["available"] is False
    assert client.get("/menu").json()["products"] == []
    
    invalid = client.post("/products", headers=staff_headers, json={
        "name": "Free Coffee", "basePrice": 0, "category": "espresso-based"
    })
    assert invalid.status_code == 422
    
    rounded_to_zero = client.post("/products", headers=staff_headers, json={
        "name": "Free Coffee", "basePrice": "0.004", "category": "espresso-based"
    })
    assert rounded_to_zero.status_code == 422
    
    nulls = client.put(f"/products/{created['id']}", headers=staff_headers, json={"name": None, "basePrice": None})
    assert nulls.status_code == 200
    assert nulls.json()["name"] == "Cold Brew"
    assert nulls.json()["basePrice"] == "110.00"
    
    assert client.delete(f"/products/{created['id']}", headers=staff_headers).status_code == 204
    assert client.get(f"/products/{created['id']}", headers=staff_headers).status_code == 404
