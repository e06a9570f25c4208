def test_contact_message_is_public_to_send_and_admin_to_read(client, register, admin_headers):
    res = client.post("/api/contact", json={"name": "Visitor", "email": "v@example.com", "message": "Hello"})
    assert res.status_code == 201
    assert res.json()["success"] is True

    assert client.post("/api/contact", json={"name": "Visitor", "email": "v@example.com"}).status_code == 400
    assert client.get("/api/contact").status_code == 401

    owner_headers, _ = register(email="boss@example.com", industry="spa")
    assert client.get("/api/contact", headers=owner_headers).status_code == 403

    messages = client.get("/api/contact", headers=admin_headers).json()["messages"]
    assert [m["message"] for m in messages] == ["Hello"]


def test_registration_cannot_grant_admin(client):
    body = {"name": "Sneaky", "email": "sneaky@example.com", "password": "secret123", "industry": "spa", "role": "admin"}
    assert client.post("/api/auth/register", json=body).status_code == 400


def test_waiver_pdf_download(client, gym_owner):
    res = client.get("/api/waiver-forms/download")
    assert res.status_code == 200
    assert res.headers["content-type"] == "application/pdf"
    assert "gym-waiver-form.pdf" in res.headers["content-disposition"]
    assert res.content.startswith(b"%PDF")

    headers, _ = gym_owner
    branded = client.get("/api/waiver-forms/download", headers=headers)
    assert branded.content.startswith(b"%PDF")


def test_unknown_routes_use_the_error_envelope(client):
    res = client.get("/api/does-not-exist")
    assert res.status_code == 404
    assert res.json()["success"] is False
