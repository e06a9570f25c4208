import io

from PIL import Image


def _png_bytes(size=(800, 400)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, (200, 30, 30)).save(buf, format="PNG")
    return buf.getvalue()


def test_public_gym_register_rejects_duplicate_name(client):
    res = client.post("/api/gym/register", json={"name": "Pump House"})
    assert res.status_code == 201
    gym = res.json()["gym"]
    assert gym["gymCode"].startswith("GYM") and len(gym["gymCode"]) == 9

    dup = client.post("/api/gym/register", json={"name": "Pump House"})
    assert dup.status_code == 400
    assert dup.json()["message"] == "Gym already exists"


def test_gym_info_read_and_merge_update(client, gym_owner):
    headers, _ = gym_owner
    info = client.get("/api/gym/info", headers=headers)
    assert info.status_code == 200
    assert info.json()["gym"]["name"] == "Iron Temple"

    client.put("/api/gym/info", json={"contactInfo": {"phone": "111"}}, headers=headers)
    res = client.put("/api/gym/info", json={"name": "Iron Temple 2", "contactInfo": {"email": "a@b.co"}}, headers=headers)
    gym = res.json()["gym"]
    assert gym["name"] == "Iron Temple 2"
    assert gym["contactInfo"] == {"phone": "111", "email": "a@b.co"}


def test_non_gym_users_are_refused_gym_routes(client, register):
    headers, _ = register(email="spa@example.com", industry="spa")
    res = client.get("/api/gym/info", headers=headers)
    assert res.status_code == 403
    assert res.json()["message"] == "Access denied. Not a gym user."


def test_gym_qr_code_is_png(client, gym_owner):
    headers, _ = gym_owner
    res = client.get("/api/gym/qr-code", headers=headers)
    assert res.status_code == 200
    assert res.headers["content-type"] == "image/png"
    assert res.content.startswith(b"\x89PNG")


def test_logo_upload_is_resized_and_served(client, gym_owner):
    headers, _ = gym_owner
    res = client.post(
        "/api/gym/logo",
        files={"logo": ("logo.png", _png_bytes(), "image/png")},
        headers=headers,
    )
    assert res.status_code == 200, res.text
    path = res.json()["logo"]
    assert path.startswith("/uploads/logos/gym_")

    served = client.get(path)
    assert served.status_code == 200
    assert Image.open(io.BytesIO(served.content)).size == (512, 256)


def test_logo_upload_rejects_non_images(client, gym_owner):
    headers, _ = gym_owner
    res = client.post(
        "/api/gym/logo",
        files={"logo": ("notes.txt", b"hello", "text/plain")},
        headers=headers,
    )
    assert res.status_code == 400


def test_subscription_status(client, register, set_subscription):
    headers, user = register()
    status = client.get("/api/gym/subscription-status", headers=headers).json()
    assert status["active"] is False
    assert status["daysRemaining"] == 0

    set_subscription(user["gymId"], days=10)
    status = client.get("/api/gym/subscription-status", headers=headers).json()
    assert status["active"] is True
    assert 9 <= status["daysRemaining"] <= 10
