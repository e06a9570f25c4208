from gymcrm.core.dates import utcnow


def _invoice_body(name="Jane Doe", **extra):
    return {
        "customer": {"name": name, "email": "jane@example.com"},
        "items": [
            {"description": "Monthly membership", "quantity": 1, "price": 40},
            {"description": "Locker", "quantity": 2, "price": 5},
        ],
        "tax": 5,
        "discount": 10,
        **extra,
    }


def test_invoice_numbers_follow_the_gym_counter(client, gym_owner):
    headers, _ = gym_owner
    year = utcnow().year
    first = client.post("/api/invoices", json=_invoice_body(), headers=headers)
    assert first.status_code == 201, first.text
    invoice = first.json()["invoice"]
    assert invoice["invoiceNumber"] == f"INV-{year}-0001"
    assert (invoice["subtotal"], invoice["total"]) == (50, 45)

    second = client.post("/api/invoices", json=_invoice_body(), headers=headers).json()["invoice"]
    assert second["invoiceNumber"] == f"INV-{year}-0002"


def test_users_without_gym_count_their_invoices(client, register):
    headers, _ = register(email="spa@example.com", industry="spa")
    year = utcnow().year
    client.post("/api/invoices", json=_invoice_body(), headers=headers)
    second = client.post("/api/invoices", json=_invoice_body(), headers=headers).json()["invoice"]
    assert second["invoiceNumber"] == f"INV-{year}-0002"


def test_numbers_without_gym_skip_past_deleted_invoices(client, register):
    headers, _ = register(email="spa@example.com", industry="spa")
    year = utcnow().year
    client.post("/api/invoices", json=_invoice_body(), headers=headers)
    client.post("/api/invoices", json=_invoice_body(), headers=headers)
    assert client.delete(f"/api/invoices/INV-{year}-0001", headers=headers).status_code == 200

    third = client.post("/api/invoices", json=_invoice_body(), headers=headers)
    assert third.status_code == 201, third.text
    assert third.json()["invoice"]["invoiceNumber"] == f"INV-{year}-0003"


def test_list_returns_summaries_with_filters(client, gym_owner):
    headers, _ = gym_owner
    client.post("/api/invoices", json=_invoice_body(name="Alpha"), headers=headers)
    client.post("/api/invoices", json=_invoice_body(name="Beta", status="Paid"), headers=headers)

    listing = client.get("/api/invoices", headers=headers).json()
    assert listing["pagination"]["total"] == 2
    summary = listing["invoices"][0]
    assert set(summary) == {"id", "customer", "status", "total", "date", "dueDate"}
    assert summary["id"].startswith("INV-")

    paid = client.get("/api/invoices", params={"status": "Paid"}, headers=headers).json()["invoices"]
    assert [i["customer"] for i in paid] == ["Beta"]

    found = client.get("/api/invoices", params={"search": "alp"}, headers=headers).json()["invoices"]
    assert [i["customer"] for i in found] == ["Alpha"]


def test_update_by_number_and_paid_notification(client, gym_owner):
    headers, _ = gym_owner
    number = client.post("/api/invoices", json=_invoice_body(), headers=headers).json()["invoice"]["invoiceNumber"]

    res = client.put(f"/api/invoices/{number}", json={"status": "Paid"}, headers=headers)
    assert res.status_code == 200
    assert res.json()["invoice"]["status"] == "Paid"

    types = [n["type"] for n in client.get("/api/notifications", headers=headers).json()["notifications"]]
    assert "invoice_created" in types
    assert "invoice_paid" in types

    assert client.get(f"/api/invoices/{number}", headers=headers).json()["invoice"]["status"] == "Paid"
    assert client.delete(f"/api/invoices/{number}", headers=headers).status_code == 200
    assert client.get(f"/api/invoices/{number}", headers=headers).status_code == 404


def test_invoice_requires_items(client, gym_owner):
    headers, _ = gym_owner
    res = client.post("/api/invoices", json=_invoice_body(items=[]), headers=headers)
    assert res.status_code == 400
