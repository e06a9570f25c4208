from datetime import date, timedelta

from sqlalchemy.exc import SQLAlchemyError

from gymcrm.core.dates import membership_end, utcnow
from gymcrm.models import Gym
from gymcrm.services import renewal_service


def today():
    return utcnow().date()


def test_create_customer_with_fees_records_joining_transaction(client, gym_owner):
    headers, _ = gym_owner
    start = today()
    res = client.post(
        "/api/customers",
        json={
            "name": "Sam Lift",
            "email": "sam@example.com",
            "membershipType": "gold",
            "membershipFees": 120,
            "membershipDuration": 1,
            "membershipStartDate": start.isoformat(),
            "paymentMode": "upi",
        },
        headers=headers,
    )
    assert res.status_code == 201, res.text
    customer = res.json()["customer"]
    assert customer["totalSpent"] == 120
    assert customer["membershipEndDate"] == membership_end(start, 1).isoformat()

    history = client.get(f"/api/customers/{customer['id']}/transactions", headers=headers).json()["transactions"]
    assert [t["transactionType"] for t in history] == ["MEMBERSHIP_JOINING"]
    assert history[0]["paymentMode"] == "upi"

    notifications = client.get("/api/notifications", headers=headers).json()["notifications"]
    assert any(n["type"] == "customer_created" for n in notifications)


def test_list_search_is_case_insensitive_and_paginated(client, gym_owner):
    headers, _ = gym_owner
    for name in ("Charlie", "alice", "Bob"):
        client.post("/api/customers", json={"name": name, "email": f"{name.lower()}@example.com"}, headers=headers)

    res = client.get("/api/customers", params={"limit": 2}, headers=headers).json()
    assert res["total"] == 3
    assert len(res["customers"]) == 2
    assert res["pagination"]["pages"] == 2

    found = client.get("/api/customers", params={"search": "ALI"}, headers=headers).json()
    assert [c["name"] for c in found["customers"]] == ["alice"]


def test_customers_are_scoped_to_their_owner(client, gym_owner, register, set_subscription, customer):
    other_headers, other = register(email="rival@example.com", gym_name="Rival Gym")
    set_subscription(other["gymId"])
    res = client.get(f"/api/customers/{customer['id']}", headers=other_headers)
    assert res.status_code == 404


def test_update_and_delete_customer(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.put(f"/api/customers/{customer['id']}", json={"phone": "999", "notes": "VIP"}, headers=headers)
    assert res.json()["customer"]["phone"] == "999"

    assert client.delete(f"/api/customers/{customer['id']}", headers=headers).status_code == 200
    assert client.get(f"/api/customers/{customer['id']}", headers=headers).status_code == 404
    assert client.delete(f"/api/customers/{customer['id']}", headers=headers).status_code == 404


def _renewal_body(start, fees=50, months=1, **extra):
    return {
        "membershipType": "gold",
        "membershipFees": fees,
        "membershipDuration": months,
        "membershipStartDate": start.isoformat(),
        "paymentMode": "cash",
        **extra,
    }


def test_renewal_extends_active_membership(client, gym_owner):
    headers, user = gym_owner
    start = today() - timedelta(days=10)
    created = client.post(
        "/api/customers",
        json={
            "name": "Rita", "email": "rita@example.com", "membershipType": "gold", "membershipFees": 100,
            "membershipDuration": 1, "membershipStartDate": start.isoformat(), "paymentMode": "cash",
        },
        headers=headers,
    ).json()["customer"]
    current_end = date.fromisoformat(created["membershipEndDate"])

    preview = client.post(
        f"/api/customers/{created['id']}/renew/preview", json=_renewal_body(today()), headers=headers
    ).json()["renewal"]
    assert preview["willExtend"] is True

    res = client.post(
        f"/api/customers/{created['id']}/renew",
        json=_renewal_body(today(), notes="paid at desk"),
        headers=headers,
    )
    assert res.status_code == 200, res.text
    body = res.json()
    expected_end = membership_end(current_end + timedelta(days=1), 1)

    assert body["renewal"] == {
        "willExtend": True,
        "newStartDate": start.isoformat(),
        "newEndDate": expected_end.isoformat(),
        "currentEndDate": current_end.isoformat(),
    }
    assert body["customer"]["membershipEndDate"] == expected_end.isoformat()
    assert body["customer"]["totalSpent"] == 150
    assert body["transaction"]["transactionType"] == "MEMBERSHIP_RENEWAL"
    assert body["transaction"]["invoiceId"] == body["invoice"]["id"]
    assert "Notes: paid at desk" in body["transaction"]["description"]
    assert body["invoice"]["status"] == "Paid"
    assert body["invoice"]["invoiceNumber"] == f"INV-{today().year}-0001"
    assert body["invoice"]["total"] == 50


def test_renewal_restarts_expired_membership(client, gym_owner):
    headers, _ = gym_owner
    old_start = today() - timedelta(days=120)
    created = client.post(
        "/api/customers",
        json={
            "name": "Old Timer", "email": "old@example.com", "membershipDuration": 1,
            "membershipStartDate": old_start.isoformat(),
        },
        headers=headers,
    ).json()["customer"]

    body = client.post(
        f"/api/customers/{created['id']}/renew", json=_renewal_body(today(), months=3), headers=headers
    ).json()
    assert body["renewal"]["willExtend"] is False
    assert body["customer"]["membershipStartDate"] == today().isoformat()
    assert body["customer"]["membershipEndDate"] == membership_end(today(), 3).isoformat()


def test_renewal_rejects_bad_payment_mode(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.post(
        f"/api/customers/{customer['id']}/renew",
        json=_renewal_body(today(), paymentMode="cheque"),
        headers=headers,
    )
    assert res.status_code == 400


def test_first_renewal_without_membership_restarts(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.post(
        f"/api/customers/{customer['id']}/renew/preview", json=_renewal_body(today()), headers=headers
    )
    assert res.status_code == 200, res.text
    assert res.json()["renewal"] == {
        "willExtend": False,
        "newStartDate": today().isoformat(),
        "newEndDate": membership_end(today(), 1).isoformat(),
        "currentEndDate": None,
    }


def test_renewal_without_months_or_days_is_rejected(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.post(
        f"/api/customers/{customer['id']}/renew",
        json=_renewal_body(today() + timedelta(days=400), months=0, membershipDays=0),
        headers=headers,
    )
    assert res.status_code == 400
    assert client.get("/api/invoices", headers=headers).json()["invoices"] == []


def test_failed_renewal_leaves_nothing_behind(client, gym_owner, run_db, monkeypatch):
    headers, user = gym_owner
    created = client.post(
        "/api/customers",
        json={
            "name": "Rita", "email": "rita@example.com", "membershipType": "gold", "membershipFees": 100,
            "membershipDuration": 1, "membershipStartDate": today().isoformat(), "paymentMode": "cash",
        },
        headers=headers,
    ).json()["customer"]

    async def broken_notification(*args, **kwargs):
        raise SQLAlchemyError("notification insert failed")

    monkeypatch.setattr(renewal_service, "create_notification", broken_notification)
    res = client.post(f"/api/customers/{created['id']}/renew", json=_renewal_body(today()), headers=headers)
    assert res.status_code == 500
    assert res.json()["message"] == "Error renewing membership"

    after = client.get(f"/api/customers/{created['id']}", headers=headers).json()["customer"]
    assert after["membershipEndDate"] == created["membershipEndDate"]
    assert after["totalSpent"] == 100
    assert client.get("/api/invoices", headers=headers).json()["invoices"] == []
    history = client.get(f"/api/customers/{created['id']}/transactions", headers=headers).json()["transactions"]
    assert [t["transactionType"] for t in history] == ["MEMBERSHIP_JOINING"]

    async def _counter(session):
        return (await session.get(Gym, user["gymId"])).invoice_counter

    assert run_db(_counter) == 1
