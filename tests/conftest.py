import asyncio
import os
import tempfile
from datetime import timedelta

os.environ["LOG_FILE_PATH"] = ""
os.environ["ENVIRONMENT"] = "test"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="gymcrm-uploads-")
os.environ["RAZORPAY_KEY_SECRET"] = "test-secret"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from gymcrm.core.dates import utcnow
from gymcrm.db.postgresql import create_tables, get_db
from gymcrm.main import app
from gymcrm.models import Gym
from gymcrm.services.payment_service import PaymentGateway, get_payment_gateway


class FakeGateway(PaymentGateway):
    def __init__(self):
        super().__init__(key_id="rzp_test", key_secret="test-secret", api_url="http://razorpay.invalid")
        self.orders = []

    async def create_order(self, amount, *, currency=None, receipt=None, notes=None) -> dict:
        order = {"id": f"order_{len(self.orders) + 1}", "amount": int(round(float(amount) * 100)), "currency": currency or "INR"}
        self.orders.append(order)
        return order


@pytest.fixture
def db_engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    asyncio.run(create_tables(engine))
    yield engine
    asyncio.run(engine.dispose())


@pytest.fixture
def session_factory(db_engine):
    return async_sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
def run_db(session_factory):
    """Run ``fn(session)`` to completion against the test database."""
    def _run(fn):
        async def _inner():
            async with session_factory() as session:
                return await fn(session)
        return asyncio.run(_inner())
    return _run


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def client(session_factory, gateway):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register a user and return ``(headers, user)``; cookies are dropped so tests stay explicit."""
    def _register(email="owner@example.com", industry="gym", gym_name="Iron Temple", **extra):
        body = {"name": "Owner", "email": email, "password": "secret123", "industry": industry, **extra}
        if industry == "gym":
            body["gymName"] = gym_name
        res = client.post("/api/auth/register", json=body)
        assert res.status_code == 201, res.text
        client.cookies.clear()
        data = res.json()
        return {"Authorization": f"Bearer {data['token']}"}, data["user"]
    return _register


@pytest.fixture
def set_subscription(run_db):
    def _set(gym_id, days=30):
        async def _apply(session):
            now = utcnow()
            await session.execute(
                update(Gym)
                .where(Gym.id == gym_id)
                .values(subscription_start_date=now, subscription_end_date=now + timedelta(days=days))
            )
            await session.commit()
        run_db(_apply)
    return _set


@pytest.fixture
def gym_owner(register, set_subscription):
    """Gym owner whose subscription is active."""
    headers, user = register()
    set_subscription(user["gymId"])
    return headers, user


@pytest.fixture
def customer(client, gym_owner):
    headers, _ = gym_owner
    res = client.post(
        "/api/customers",
        json={"name": "Jane Doe", "email": "jane@example.com", "phone": "555-0101"},
        headers=headers,
    )
    assert res.status_code == 201, res.text
    return res.json()["customer"]


@pytest.fixture
def admin_headers(client, run_db):
    """Bearer headers for a platform admin, who can only be created outside the API."""
    from gymcrm.crud.usersCrud import create_user

    async def _add(session):
        await create_user(
            session, name="Platform", email="admin@gymcrm.test", password="secret123",
            industry="club", role="admin",
        )
    run_db(_add)
    res = client.post("/api/auth/login", json={"email": "admin@gymcrm.test", "password": "secret123"})
    client.cookies.clear()
    return {"Authorization": f"Bearer {res.json()['token']}"}
