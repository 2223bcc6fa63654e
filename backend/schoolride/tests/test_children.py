"""Tests for parents registering and viewing children."""

import asyncio
import pathlib
import sys

from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker
from sqlmodel import SQLModel

# Allow importing the schoolride package
sys.path.append(str(pathlib.Path(__file__).resolve().parents[2]))

from schoolride.main import app
from schoolride.database import get_session


async def _setup_test_db():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    TestSession = async_sessionmaker(engine, expire_on_commit=False)

    async def override_get_session():
        async with TestSession() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    return TestSession


async def _login(client, email):
    resp = await client.post("/login", json={"email": email, "password": "pass"})
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


def test_parent_child_registration():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            for name, email, role in (
                ("Admin", "admin@example.com", "parent"),
                ("Pat", "pat@example.com", "parent"),
                ("Olive", "olive@example.com", "parent"),
                ("Dana", "dana@example.com", "driver"),
            ):
                resp = await client.post(
                    "/register",
                    json={"name": name, "email": email, "password": "pass", "role": role},
                )
                assert resp.status_code == 200
            admin = await _login(client, "admin@example.com")
            pat = await _login(client, "pat@example.com")
            olive = await _login(client, "olive@example.com")
            dana = await _login(client, "dana@example.com")

            child = {
                "name": "Mia",
                "age": 8,
                "school_name": "Oak Elementary",
                "pickup_address": "1 Home St",
                "drop_address": "2 School Rd",
            }
            resp = await client.post("/children/", headers=pat, json=child)
            assert resp.status_code == 200
            mia = resp.json()
            assert mia["parent_name"] == "Pat"
            assert mia["driver_name"] is None

            resp = await client.post(
                "/children/", headers=pat, json={**child, "name": "Ben", "age": -1}
            )
            assert resp.status_code == 422

            # Only parents register children
            resp = await client.post("/children/", headers=dana, json=child)
            assert resp.status_code == 403

            resp = await client.get("/children/", headers=pat)
            assert [c["name"] for c in resp.json()] == ["Mia"]
            resp = await client.get("/children/", headers=olive)
            assert resp.json() == []

            resp = await client.get(f"/children/{mia['id']}", headers=pat)
            assert resp.status_code == 200
            resp = await client.get(f"/children/{mia['id']}", headers=admin)
            assert resp.status_code == 200
            for headers in (olive, dana):
                resp = await client.get(f"/children/{mia['id']}", headers=headers)
                assert resp.status_code == 404

    asyncio.run(run())
