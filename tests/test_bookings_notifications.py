from datetime import timedelta

from gymcrm.core.dates import utcnow
from gymcrm.crud.usersCrud import create_user


def _booking(customer_id, **extra):
    return {
        "customer": {"id": customer_id},
        "service": {"name": "Massage", "duration": 60, "price": 80},
        "staff": {"id": 1, "name": "Kim"},
        "date": "2026-05-04T00:00:00Z",
        "startTime": "10:00",
        "endTime": "11:00",
        **extra,
    }


def _types(client, headers):
    return [n["type"] for n in client.get("/api/notifications", headers=headers).json()["notifications"]]


def test_booking_lifecycle_emits_notifications(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.post("/api/bookings", json=_booking(customer["id"]), headers=headers)
    assert res.status_code == 201, res.text
    booking = res.json()["booking"]
    assert booking["customer"]["name"] == "Jane Doe"
    assert booking["service"]["price"] == 80
    assert "booking_created" in _types(client, headers)

    client.put(f"/api/bookings/{booking['id']}", json={"notes": "bring towel"}, headers=headers)
    assert "booking_updated" in _types(client, headers)

    cancelled = client.put(f"/api/bookings/{booking['id']}", json={"status": "Cancelled"}, headers=headers)
    assert cancelled.json()["booking"]["status"] == "Cancelled"
    assert "booking_cancelled" in _types(client, headers)


def test_booking_filters(client, gym_owner, customer):
    headers, _ = gym_owner
    client.post("/api/bookings", json=_booking(customer["id"]), headers=headers)
    client.post("/api/bookings", json=_booking(customer["id"], date="2026-05-05T00:00:00Z", status="Confirmed"), headers=headers)

    everything = client.get("/api/bookings", params={"status": "All"}, headers=headers).json()
    assert everything["pagination"]["total"] == 2
    assert [b["date"][:10] for b in everything["bookings"]] == ["2026-05-04", "2026-05-05"]

    confirmed = client.get("/api/bookings", params={"status": "Confirmed"}, headers=headers).json()["bookings"]
    assert len(confirmed) == 1

    day = client.get("/api/bookings", params={"date": "2026-05-04"}, headers=headers).json()["bookings"]
    assert len(day) == 1


def test_bookings_on_the_same_day_sort_by_clock_time(client, gym_owner, customer):
    headers, _ = gym_owner
    client.post("/api/bookings", json=_booking(customer["id"], startTime="10:00", endTime="11:00"), headers=headers)
    early = client.post("/api/bookings", json=_booking(customer["id"], startTime="9:00", endTime="9:30"), headers=headers)
    assert early.json()["booking"]["startTime"] == "09:00"

    bookings = client.get("/api/bookings", headers=headers).json()["bookings"]
    assert [b["startTime"] for b in bookings] == ["09:00", "10:00"]
    assert client.post("/api/bookings", json=_booking(customer["id"], startTime="25:00"), headers=headers).status_code == 400


def test_booking_rejects_unknown_customer_and_bad_times(client, gym_owner, customer):
    headers, _ = gym_owner
    assert client.post("/api/bookings", json=_booking(9999), headers=headers).status_code == 404
    assert client.post("/api/bookings", json=_booking(customer["id"], startTime="ten"), headers=headers).status_code == 400


def test_notifications_read_and_delete(client, gym_owner):
    headers, _ = gym_owner
    for title in ("One", "Two"):
        res = client.post("/api/notifications", json={"title": title, "message": "hello"}, headers=headers)
        assert res.status_code == 201

    listing = client.get("/api/notifications", headers=headers).json()
    assert listing["unreadCount"] == 2
    first = listing["notifications"][0]

    read = client.put(f"/api/notifications/{first['id']}/read", headers=headers)
    assert read.json()["notification"]["read"] is True
    unread = client.get("/api/notifications", params={"read": "false"}, headers=headers).json()["notifications"]
    assert len(unread) == 1

    client.put("/api/notifications/read-all", headers=headers)
    assert client.get("/api/notifications", headers=headers).json()["unreadCount"] == 0

    assert client.delete(f"/api/notifications/{first['id']}", headers=headers).status_code == 200
    assert client.delete(f"/api/notifications/{first['id']}", headers=headers).status_code == 404


def _staff_headers(client, run_db, gym_id):
    async def add_staff(session):
        await create_user(
            session, name="Desk", email="desk@example.com", password="secret123",
            industry="gym", role="staff", gym_id=gym_id,
        )
    run_db(add_staff)

    login = client.post("/api/auth/login", json={"email": "desk@example.com", "password": "secret123"})
    client.cookies.clear()
    return {"Authorization": f"Bearer {login.json()['token']}"}


def test_broadcasts_reach_other_users_of_the_gym(client, gym_owner, run_db):
    headers, owner = gym_owner
    client.post("/api/notifications", json={"title": "Closed Monday", "message": "Holiday", "broadcast": True}, headers=headers)
    staff_headers = _staff_headers(client, run_db, owner["gymId"])

    notifications = client.get("/api/notifications", headers=staff_headers).json()["notifications"]
    assert [n["title"] for n in notifications] == ["Closed Monday"]
    assert notifications[0]["type"] == "broadcast"


def test_broadcast_read_state_is_per_user(client, gym_owner, run_db):
    headers, owner = gym_owner
    client.post("/api/notifications", json={"title": "New hours", "message": "Open 24/7", "broadcast": True}, headers=headers)
    staff_headers = _staff_headers(client, run_db, owner["gymId"])

    assert client.put("/api/notifications/read-all", headers=staff_headers).json()["updated"] == 1
    staff_view = client.get("/api/notifications", headers=staff_headers).json()
    assert staff_view["unreadCount"] == 0
    assert staff_view["notifications"][0]["read"] is True

    owner_view = client.get("/api/notifications", headers=headers).json()
    assert owner_view["unreadCount"] == 1
    assert owner_view["notifications"][0]["read"] is False

    broadcast_id = owner_view["notifications"][0]["id"]
    res = client.put(f"/api/notifications/{broadcast_id}/read", headers=headers)
    assert res.json()["notification"]["read"] is True
    assert client.get("/api/notifications", params={"read": "false"}, headers=headers).json()["notifications"] == []


def test_expired_notifications_are_not_counted(client, gym_owner):
    headers, _ = gym_owner
    expired = (utcnow() - timedelta(days=1)).isoformat()
    client.post("/api/notifications", json={"title": "Old", "message": "Gone", "expiresAt": expired}, headers=headers)

    body = client.get("/api/notifications", headers=headers).json()
    assert body["notifications"] == []
    assert body["unreadCount"] == 0
