"""Message Routes — contact seller, inbox, conversations, read flag."""

from tests.services.api_helpers import create_listing, login


async def _listing_from_seller(client) -> dict:
    await login(client, "ada@example.com")
    listing = await create_listing(client)
    await login(client, "bo@example.com")
    return listing


async def test_contact_seller_reaches_inbox(client, seller, buyer):
    listing = await _listing_from_seller(client)
    sent = await client.post("/api/v1/messages", json={
        "listing_id": listing["id"], "body": "Still available?",
    })
    assert sent.status_code == 201
    assert sent.json()["seller_handle"] == "ada#1234"
    assert sent.json()["buyer_handle"] == "bo#5678"

    buyer_inbox = await client.get("/api/v1/messages/inbox")
    assert buyer_inbox.json() == {"unread": 0, "messages": []}

    await login(client, "ada@example.com")
    inbox = (await client.get("/api/v1/messages/inbox")).json()
    assert inbox["unread"] == 1
    assert inbox["messages"][0]["body"] == "Still available?"


async def test_empty_body_is_400(client, seller, buyer):
    listing = await _listing_from_seller(client)
    response = await client.post("/api/v1/messages", json={
        "listing_id": listing["id"], "body": "   ",
    })
    assert response.status_code == 400
    assert response.json()["error"]["field"] == "body"


async def test_contact_requires_login(client, seller, buyer):
    listing = await _listing_from_seller(client)
    await client.post("/api/v1/auth/logout")
    response = await client.post("/api/v1/messages", json={
        "listing_id": listing["id"], "body": "hello",
    })
    assert response.status_code == 401


async def test_contact_unknown_listing_is_404(client, buyer):
    response = await client.post("/api/v1/messages", json={
        "listing_id": "missing", "body": "hello",
    })
    assert response.status_code == 404


async def test_mark_read(client, seller, buyer):
    listing = await _listing_from_seller(client)
    sent = (await client.post("/api/v1/messages", json={
        "listing_id": listing["id"], "body": "hello",
    })).json()
    await login(client, "ada@example.com")
    assert (await client.post(f"/api/v1/messages/{sent['id']}/read")).status_code == 204
    assert (await client.post("/api/v1/messages/missing/read")).status_code == 204
    inbox = (await client.get("/api/v1/messages/inbox")).json()
    assert inbox["unread"] == 0
    assert inbox["messages"][0]["read"] is True


async def test_conversations_include_sent_messages(client, seller, buyer):
    listing = await _listing_from_seller(client)
    await client.post("/api/v1/messages", json={"listing_id": listing["id"], "body": "hello"})
    conversations = (await client.get("/api/v1/messages/conversations")).json()
    assert [m["body"] for m in conversations] == ["hello"]


async def test_mark_read_ignores_other_users_messages(client, seller, buyer):
    listing = await _listing_from_seller(client)
    sent = (await client.post("/api/v1/messages", json={
        "listing_id": listing["id"], "body": "hello",
    })).json()
    assert (await client.post(f"/api/v1/messages/{sent['id']}/read")).status_code == 204
    await login(client, "ada@example.com")
    inbox = (await client.get("/api/v1/messages/inbox")).json()
    assert inbox["unread"] == 1
    assert inbox["messages"][0]["read"] is False
