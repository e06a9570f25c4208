def _plan(**extra):
    return {
        "name": "Gold",
        "description": "Full gym access with classes",
        "price": 49.5,
        "duration": 3,
        "features": ["Pool", "Sauna"],
        **extra,
    }


def test_membership_plan_crud(client, gym_owner):
    headers, _ = gym_owner
    res = client.post("/api/gym/membership-plans", json=_plan(), headers=headers)
    assert res.status_code == 201, res.text
    plan = res.json()["plan"]
    assert (plan["price"], plan["duration"], plan["isActive"]) == (49.5, 3, True)
    assert plan["features"] == ["Pool", "Sauna"]

    updated = client.put(
        f"/api/gym/membership-plans/{plan['id']}", json={"price": 55, "isActive": False}, headers=headers
    ).json()["plan"]
    assert (updated["price"], updated["isActive"], updated["name"]) == (55, False, "Gold")

    listed = client.get("/api/gym/membership-plans", headers=headers).json()["plans"]
    assert [p["id"] for p in listed] == [plan["id"]]

    assert client.delete(f"/api/gym/membership-plans/{plan['id']}", headers=headers).status_code == 200
    missing = client.delete(f"/api/gym/membership-plans/{plan['id']}", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["message"] == "Membership plan not found"


def test_membership_plan_validation(client, gym_owner):
    headers, _ = gym_owner
    for bad in (_plan(name="Go"), _plan(description="short"), _plan(price=-1), _plan(duration=0)):
        assert client.post("/api/gym/membership-plans", json=bad, headers=headers).status_code == 400


def test_membership_plans_are_scoped_to_their_owner(client, gym_owner, register, set_subscription):
    headers, _ = gym_owner
    plan = client.post("/api/gym/membership-plans", json=_plan(), headers=headers).json()["plan"]

    other_headers, other = register(email="rival@example.com", gym_name="Rival Gym")
    set_subscription(other["gymId"])
    assert client.get("/api/gym/membership-plans", headers=other_headers).json()["plans"] == []
    res = client.put(f"/api/gym/membership-plans/{plan['id']}", json={"price": 1}, headers=other_headers)
    assert res.status_code == 404
