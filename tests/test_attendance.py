import json

from gymcrm.services.qr_service import member_payload


def test_check_in_and_out_cycle(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.post("/api/attendance/check-in", json={"memberId": customer["id"], "notes": "morning"}, headers=headers)
    assert res.status_code == 201, res.text
    record = res.json()["attendance"]
    assert record["status"] == "Checked In"
    assert record["method"] == "Manual"
    assert record["member"]["name"] == "Jane Doe"

    again = client.post("/api/attendance/check-in", json={"memberId": customer["id"]}, headers=headers)
    assert again.status_code == 400
    assert again.json()["message"] == "Member already checked in"

    active = client.get("/api/attendance/active", headers=headers).json()["attendance"]
    assert [a["id"] for a in active] == [record["id"]]

    out = client.put(f"/api/attendance/check-out/{record['id']}", headers=headers)
    assert out.status_code == 200
    assert out.json()["attendance"]["status"] == "Checked Out"
    assert client.put(f"/api/attendance/check-out/{record['id']}", headers=headers).status_code == 404

    stats = client.get("/api/attendance/stats", headers=headers).json()["stats"]
    assert stats == {"totalToday": 1, "currentlyIn": 0, "membersToday": 1}

    visited = client.get(f"/api/customers/{customer['id']}", headers=headers).json()["customer"]
    assert visited["lastVisit"] is not None


def test_check_in_unknown_member(client, gym_owner):
    headers, _ = gym_owner
    res = client.post("/api/attendance/check-in", json={"memberId": 12345}, headers=headers)
    assert res.status_code == 404


def test_list_filters_by_status(client, gym_owner, customer):
    headers, _ = gym_owner
    client.post("/api/attendance/check-in", json={"memberId": customer["id"]}, headers=headers)

    listing = client.get("/api/attendance", params={"status": "Checked In"}, headers=headers).json()
    assert len(listing["attendance"]) == 1
    assert listing["stats"]["currentlyIn"] == 1

    out = client.get("/api/attendance", params={"status": "Checked Out"}, headers=headers).json()
    assert out["attendance"] == []


def test_qr_check_in(client, gym_owner, customer):
    headers, user = gym_owner
    payload = member_payload(customer["id"], user["gymId"])
    res = client.post("/api/attendance/qr-check-in", json={"payload": payload}, headers=headers)
    assert res.status_code == 201, res.text
    assert res.json()["attendance"]["method"] == "QR"


def test_qr_check_in_rejects_bad_payloads(client, gym_owner, customer):
    headers, user = gym_owner
    bad = client.post("/api/attendance/qr-check-in", json={"payload": "not json"}, headers=headers)
    assert bad.status_code == 400

    missing = client.post("/api/attendance/qr-check-in", json={"payload": json.dumps({"memberId": 1})}, headers=headers)
    assert missing.status_code == 400

    other_gym = member_payload(customer["id"], user["gymId"] + 100)
    res = client.post("/api/attendance/qr-check-in", json={"payload": other_gym}, headers=headers)
    assert res.status_code == 403


def test_range_requires_both_dates(client, gym_owner, customer):
    headers, _ = gym_owner
    assert client.get("/api/attendance/range", params={"startDate": "2026-01-01"}, headers=headers).status_code == 400

    client.post("/api/attendance/check-in", json={"memberId": customer["id"]}, headers=headers)
    res = client.get(
        "/api/attendance/range", params={"startDate": "2000-01-01", "endDate": "2999-12-31"}, headers=headers
    )
    assert len(res.json()["attendance"]) == 1


def test_member_qr_png(client, gym_owner, customer):
    headers, _ = gym_owner
    res = client.get(f"/api/attendance/member-qr/{customer['id']}", headers=headers)
    assert res.status_code == 200
    assert res.content.startswith(b"\x89PNG")
