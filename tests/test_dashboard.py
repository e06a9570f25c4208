from datetime import timedelta

from gymcrm.core.dates import utcnow


def today():
    return utcnow().date()


def _member(client, headers, name, end_in_days=None, fees=0):
    body = {"name": name, "email": f"{name.lower()}@example.com", "membershipType": "gold"}
    if end_in_days is not None:
        body["membershipEndDate"] = (today() + timedelta(days=end_in_days)).isoformat()
    if fees:
        body.update(membershipFees=fees, membershipDuration=1, membershipStartDate=today().isoformat(),
                    paymentMode="cash")
    res = client.post("/api/customers", json=body, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["customer"]


def test_expiring_customers_within_a_week(client, gym_owner):
    headers, _ = gym_owner
    _member(client, headers, "Later", end_in_days=5)
    _member(client, headers, "Soon", end_in_days=1)
    _member(client, headers, "Far", end_in_days=30)
    _member(client, headers, "Lapsed", end_in_days=-2)

    res = client.get("/api/dashboard/expiring-customers", headers=headers)
    assert res.status_code == 200
    assert [c["name"] for c in res.json()["customers"]] == ["Soon", "Later"]


def test_overview_metrics(client, gym_owner):
    headers, _ = gym_owner
    paying = _member(client, headers, "Paula", end_in_days=20)
    _member(client, headers, "Ivan", end_in_days=-10)
    client.post(
        "/api/invoices",
        json={
            "customer": {"name": "Paula", "email": "paula@example.com"},
            "items": [{"description": "Towel", "quantity": 2, "price": 25}],
            "status": "Paid",
        },
        headers=headers,
    )
    client.post(
        "/api/bookings",
        json={
            "customer": {"id": paying["id"]},
            "service": {"name": "Spin", "duration": 60, "price": 15},
            "date": f"{today().isoformat()}T00:00:00Z",
            "startTime": "09:00",
            "endTime": "10:00",
        },
        headers=headers,
    )

    res = client.get("/api/dashboard/overview", headers=headers)
    assert res.status_code == 200, res.text
    data = res.json()["data"]
    metrics = data["metrics"]
    assert metrics["totalCustomers"] == 2
    assert metrics["previousTotalCustomers"] == 0
    assert metrics["monthlyBookings"] == 1
    assert metrics["monthlyRevenue"] == 50
    assert metrics["industryStats"]["activeMembers"] == 1
    assert {"type": "gold", "count": 2} in metrics["industryStats"]["membershipDistribution"]
    assert [a["serviceName"] for a in data["recentActivities"]] == ["Spin"]

    overview = data["revenueOverview"]
    assert len(overview) == 6
    assert overview[-1] == {"year": today().year, "month": today().month, "total": 50.0}
    assert data["gymInfo"]["name"] == "Iron Temple"


def test_overview_without_gym_has_no_industry_stats(client, register):
    headers, _ = register(email="spa@example.com", industry="spa")
    data = client.get("/api/dashboard/overview", headers=headers).json()["data"]
    assert data["metrics"]["industryStats"] is None
    assert data["gymInfo"] is None
