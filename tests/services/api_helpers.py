"""API helpers for route tests — register, login and create listings through HTTP.

Going through the routes (rather than seeding documents) keeps the stored shape
under test identical to what production requests write.
"""

from datetime import datetime, timedelta, timezone

from httpx import AsyncClient

START = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)
PASSWORD = "Hunter2!x"
ADMIN_EMAIL = "admin@shipyard.test"


class FakeClock:
    """Callable clock the tests move by hand."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


async def register_user(
    client: AsyncClient, name: str, handle: str, email: str,
    password: str = PASSWORD,
) -> dict:
    """Register through the API (which also logs the user in)."""
    response = await client.post("/api/v1/auth/register", json={
        "name": name, "handle": handle, "email": email,
        "password": password, "confirm_password": password,
    })
    assert response.status_code == 201, response.text
    return response.json()["user"]


async def login(client: AsyncClient, email: str, password: str = PASSWORD) -> dict:
    response = await client.post("/api/v1/auth/login", json={
        "email": email, "password": password,
    })
    assert response.status_code == 200, response.text
    return response.json()["user"]


async def create_listing(client: AsyncClient, files: dict | None = None, **fields) -> dict:
    data = {
        "name": "Falcon Hauler", "price": "1200", "category": "transport",
        "tags": "@fast cargo",
    }
    data.update(fields)
    response = await client.post("/api/v1/listings", data=data, files=files)
    assert response.status_code == 201, response.text
    return response.json()
