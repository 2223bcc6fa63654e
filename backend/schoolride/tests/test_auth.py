"""Tests for registration, login and profile lookup."""

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


def test_registration_roles_and_login():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.get("/needs-admin")
            assert resp.json() == {"needs_admin": True}

            # The first account is always the admin, whatever it asks for
            resp = await client.post(
                "/register",
                json={
                    "name": "Admin",
                    "email": "admin@example.com",
                    "password": "pass",
                    "role": "driver",
                },
            )
            assert resp.status_code == 200
            assert resp.json()["role"] == "admin"

            resp = await client.get("/needs-admin")
            assert resp.json() == {"needs_admin": False}

            resp = await client.post(
                "/register",
                json={
                    "name": "Dana",
                    "email": "dana@example.com",
                    "password": "pass",
                    "phone": "555-0100",
                    "role": "driver",
                },
            )
            assert resp.status_code == 200
            assert resp.json()["role"] == "driver"
            assert resp.json()["phone"] == "555-0100"

            # Parent is the default role
            resp = await client.post(
                "/register",
                json={"name": "Pat", "email": "pat@example.com", "password": "pass"},
            )
            assert resp.json()["role"] == "parent"

            # Admin cannot be self-selected
            resp = await client.post(
                "/register",
                json={
                    "name": "Mallory",
                    "email": "m@example.com",
                    "password": "pass",
                    "role": "admin",
                },
            )
            assert resp.status_code == 422

            resp = await client.post(
                "/register",
                json={"name": "Pat", "email": "pat@example.com", "password": "pass"},
            )
            assert resp.status_code == 400

            resp = await client.post(
                "/login", json={"email": "dana@example.com", "password": "wrong"}
            )
            assert resp.status_code == 401

            resp = await client.post(
                "/token", data={"username": "dana@example.com", "password": "pass"}
            )
            assert resp.status_code == 200
            headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
            resp = await client.get("/users/me", headers=headers)
            assert resp.status_code == 200
            assert resp.json()["email"] == "dana@example.com"
            assert resp.json()["role"] == "driver"

            resp = await client.get(
                "/users/me", headers={"Authorization": "Bearer nonsense"}
            )
            assert resp.status_code == 401

    asyncio.run(run())


def test_registration_can_be_disabled():
    async def run():
        await _setup_test_db()
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            resp = await client.post(
                "/register",
                json={"name": "Admin", "email": "admin@example.com", "password": "pass"},
            )
            assert resp.status_code == 200
            resp = await client.post(
                "/login", json={"email": "admin@example.com", "password": "pass"}
            )
            headers = {"Authorization": f"Bearer {resp.json()['access_token']}"}
            resp = await client.put(
                "/settings/",
                headers=headers,
                json={"public_registration_disabled": True},
            )
            assert resp.status_code == 200

            resp = await client.post(
                "/register",
                json={"name": "Pat", "email": "pat@example.com", "password": "pass"},
            )
            assert resp.status_code == 404

    asyncio.run(run())
