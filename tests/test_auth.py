def test_register_gym_owner_creates_gym_and_sets_cookie(client):
    res = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "Ana@Example.com", "password": "secret123", "industry": "gym", "gymName": "Core Gym"},
    )
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["email"] == "ana@example.com"
    assert body["user"]["role"] == "owner"
    assert body["user"]["gymId"] is not None
    assert "passwordHash" not in body["user"]
    assert "token" in res.cookies


def test_register_gym_requires_gym_name(client):
    res = client.post(
        "/api/auth/register",
        json={"name": "Ana", "email": "ana@example.com", "password": "secret123", "industry": "gym"},
    )
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Gym name is required for gym industry users"}


def test_register_rejects_duplicate_email(client, register):
    register(email="dup@example.com", industry="spa")
    res = client.post(
        "/api/auth/register",
        json={"name": "Other", "email": "dup@example.com", "password": "secret123", "industry": "spa"},
    )
    assert res.status_code == 400
    assert res.json()["message"] == "User already exists"


def test_register_validation_errors_are_400(client):
    res = client.post("/api/auth/register", json={"name": "", "email": "not-an-email", "password": "1"})
    assert res.status_code == 400
    body = res.json()
    assert body["message"] == "Validation failed"
    assert body["errors"]


def test_login_with_cookie_and_logout_revokes_session(client, register):
    register(email="spa@example.com", industry="spa")

    bad = client.post("/api/auth/login", json={"email": "spa@example.com", "password": "wrong"})
    assert bad.status_code == 400
    assert bad.json()["message"] == "Invalid credentials"

    res = client.post("/api/auth/login", json={"email": "spa@example.com", "password": "secret123"})
    assert res.status_code == 200
    token = res.json()["token"]

    me = client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["industry"] == "spa"

    out = client.post("/api/auth/logout")
    assert out.json()["success"] is True

    again = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert again.status_code == 401


def test_missing_and_invalid_tokens_are_401(client):
    res = client.get("/api/auth/me")
    assert res.status_code == 401
    assert res.json()["message"] == "Authentication required"

    res = client.get("/api/auth/me", headers={"Authorization": "Bearer nope"})
    assert res.status_code == 401


def test_profile_update(client, register):
    headers, _ = register(email="club@example.com", industry="club")
    res = client.put("/api/auth/profile", json={"name": "New Name", "bio": "Hi", "phone": "123"}, headers=headers)
    assert res.status_code == 200
    user = res.json()["user"]
    assert (user["name"], user["bio"], user["phone"]) == ("New Name", "Hi", "123")

    profile = client.get("/api/auth/profile", headers=headers).json()["user"]
    assert profile["name"] == "New Name"


def test_profile_email_must_be_unique(client, register):
    register(email="first@example.com", industry="spa")
    headers, _ = register(email="second@example.com", industry="spa")
    res = client.put("/api/auth/profile", json={"email": "first@example.com"}, headers=headers)
    assert res.status_code == 400


def test_gym_user_cannot_switch_industry(client, register):
    headers, _ = register()
    res = client.put("/api/auth/profile", json={"industry": "spa"}, headers=headers)
    assert res.status_code == 400
    assert res.json()["message"] == "Industry cannot be changed while a gym is attached"
    assert client.get("/api/auth/profile", headers=headers).json()["user"]["industry"] == "gym"

    same = client.put("/api/auth/profile", json={"industry": "gym", "name": "Still Gym"}, headers=headers)
    assert same.status_code == 200


def test_user_without_gym_can_switch_industry(client, register):
    headers, _ = register(email="hotel@example.com", industry="hotel")
    res = client.put("/api/auth/profile", json={"industry": "club"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["user"]["industry"] == "club"
