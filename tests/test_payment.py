from gymcrm.services.payment_service import expected_signature


def _seed_plans(client, headers):
    client.post("/api/subscription-plans", json={"name": "Monthly", "duration": "monthly", "price": 999}, headers=headers)
    client.post("/api/subscription-plans", json={"name": "Yearly", "duration": "yearly", "price": 9999.5}, headers=headers)


def test_subscription_plans_public_read_admin_write(client, register, admin_headers):
    _seed_plans(client, admin_headers)
    plans = client.get("/api/subscription-plans").json()["plans"]
    assert [(p["duration"], p["price"]) for p in plans] == [("monthly", 999), ("yearly", 9999.5)]

    res = client.put(f"/api/subscription-plans/{plans[0]['id']}", json={"price": 1099}, headers=admin_headers)
    assert res.json()["plan"]["price"] == 1099

    owner_headers, _ = register()
    body = {"name": "X", "duration": "monthly", "price": 1}
    assert client.post("/api/subscription-plans", json=body, headers=owner_headers).status_code == 403
    repriced = client.put(f"/api/subscription-plans/{plans[0]['id']}", json={"price": 1}, headers=owner_headers)
    assert repriced.status_code == 403


def test_create_order_uses_plan_price_in_minor_units(client, admin_headers, gateway):
    _seed_plans(client, admin_headers)

    res = client.post("/api/payment/create-order", json={"planType": "Yearly"})
    assert res.status_code == 200
    assert res.json()["order"]["amount"] == 999950
    assert gateway.orders[-1]["amount"] == 999950

    monthly = client.post("/api/payment/create-order", json={}).json()["order"]
    assert monthly["amount"] == 99900


def test_create_order_without_plan(client):
    res = client.post("/api/payment/create-order", json={"planType": "monthly"})
    assert res.status_code == 400
    assert res.json()["message"] == "Subscription plan not found"


def test_verify_activates_expired_subscription(client, register):
    headers, _ = register()
    signature = expected_signature("order_1", "pay_1", "test-secret")
    body = {"razorpay_order_id": "order_1", "razorpay_payment_id": "pay_1", "razorpay_signature": signature, "planType": "Yearly"}

    res = client.post("/api/payment/verify", json=body, headers=headers)
    assert res.status_code == 200, res.text

    gym = client.get("/api/gym/info", headers=headers).json()["gym"]
    assert gym["subscriptionDuration"] == "1 year"
    assert client.get("/api/customers", headers=headers).json()["success"] is True

    again = client.post("/api/payment/verify", json=body, headers=headers)
    assert again.status_code == 400
    assert "still active" in again.json()["message"]


def test_verify_rejects_bad_signature(client, register):
    headers, _ = register()
    body = {"razorpay_order_id": "order_1", "razorpay_payment_id": "pay_1", "razorpay_signature": "deadbeef"}
    res = client.post("/api/payment/verify", json=body, headers=headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid signature"
