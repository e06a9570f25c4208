def _spent(client, headers, customer_id):
    return client.get(f"/api/customers/{customer_id}", headers=headers).json()["customer"]["totalSpent"]


def _create(client, headers, customer_id, amount, **extra):
    body = {
        "customerId": customer_id,
        "transactionType": "PERSONAL_TRAINING",
        "amount": amount,
        "paymentMode": "card",
        **extra,
    }
    return client.post("/api/transactions", json=body, headers=headers)


def test_total_spent_follows_every_write(client, gym_owner, customer):
    headers, _ = gym_owner
    first = _create(client, headers, customer["id"], 30).json()["transaction"]
    _create(client, headers, customer["id"], 20)
    assert _spent(client, headers, customer["id"]) == 50

    patched = client.patch(f"/api/transactions/{first['id']}", json={"amount": 45, "description": "fixed"}, headers=headers)
    assert patched.status_code == 200
    assert patched.json()["transaction"]["description"] == "fixed"
    assert _spent(client, headers, customer["id"]) == 65

    assert client.delete(f"/api/transactions/{first['id']}", headers=headers).status_code == 200
    assert _spent(client, headers, customer["id"]) == 20


def test_patch_validates_fields(client, gym_owner, customer):
    headers, _ = gym_owner
    tx = _create(client, headers, customer["id"], 10).json()["transaction"]

    assert client.patch(f"/api/transactions/{tx['id']}", json={"amount": -1}, headers=headers).status_code == 400
    assert client.patch(f"/api/transactions/{tx['id']}", json={"status": "LOST"}, headers=headers).status_code == 400
    assert client.patch(f"/api/transactions/{tx['id']}", json={"customerId": 99}, headers=headers).status_code == 400


def test_create_rejects_unknown_enums(client, gym_owner, customer):
    headers, _ = gym_owner
    assert _create(client, headers, customer["id"], 10, paymentMode="barter").status_code == 400
    assert _create(client, headers, customer["id"], 10, transactionType="GIFT").status_code == 400


def test_gym_listing_is_limited_to_the_callers_gym(client, gym_owner, customer):
    headers, user = gym_owner
    _create(client, headers, customer["id"], 10)

    own = client.get(f"/api/transactions/gym/{user['gymId']}", headers=headers)
    assert own.status_code == 200
    assert len(own.json()["transactions"]) == 1

    other = client.get(f"/api/transactions/gym/{user['gymId'] + 1}", headers=headers)
    assert other.status_code == 403


def test_customer_listing(client, gym_owner, customer):
    headers, _ = gym_owner
    _create(client, headers, customer["id"], 10)
    res = client.get(f"/api/transactions/customer/{customer['id']}", headers=headers)
    assert [t["amount"] for t in res.json()["transactions"]] == [10]
