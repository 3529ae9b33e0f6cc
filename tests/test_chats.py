"""
Chat API - Chat Ownership Tests

A chat owned by someone else must be indistinguishable from a chat
that does not exist.

Run with: pytest tests/test_chats.py -v
"""

from sqlmodel import Session, select

from chatapi.db.models import Chat, Message


def create_chat(client, headers, title="General") -> dict:
    response = client.post("/chats", headers=headers, json={"title": title})
    assert response.status_code == 201
    return response.json()


class TestChatCrud:

    def test_create_chat(self, client, alice, alice_headers):
        chat = create_chat(client, alice_headers, "Plans")

        assert chat["title"] == "Plans"
        assert chat["user_id"] == alice.id

    def test_create_chat_requires_title(self, client, alice_headers):
        response = client.post("/chats", headers=alice_headers, json={})

        assert response.status_code == 422

    def test_create_chat_requires_token(self, client):
        response = client.post("/chats", json={"title": "x"})

        assert response.status_code == 403

    def test_list_only_own_chats(self, client, alice_headers, bob_headers):
        create_chat(client, alice_headers, "a1")
        create_chat(client, alice_headers, "a2")
        create_chat(client, bob_headers, "b1")

        response = client.get("/chats", headers=alice_headers)

        assert response.status_code == 200
        assert [c["title"] for c in response.json()] == ["a1", "a2"]

    def test_update_then_get_returns_latest_title(self, client, alice_headers):
        chat = create_chat(client, alice_headers, "original")

        response = client.put(f"/chats/{chat['id']}", headers=alice_headers, json={"title": "renamed"})
        assert response.status_code == 200
        assert response.json()["title"] == "renamed"

        fetched = client.get(f"/chats/{chat['id']}", headers=alice_headers).json()
        assert fetched["title"] == "renamed"

    def test_delete_chat(self, client, alice_headers):
        chat = create_chat(client, alice_headers)

        response = client.delete(f"/chats/{chat['id']}", headers=alice_headers)

        assert response.status_code == 200
        assert client.get(f"/chats/{chat['id']}", headers=alice_headers).status_code == 404

    def test_delete_chat_removes_messages(self, client, alice_headers, test_engine):
        chat = create_chat(client, alice_headers)
        client.post("/messages", headers=alice_headers, json={"chat_id": chat["id"], "content": "hi"})

        client.delete(f"/chats/{chat['id']}", headers=alice_headers)

        with Session(test_engine) as db:
            assert db.exec(select(Message).where(Message.chat_id == chat["id"])).all() == []


class TestChatOwnership:

    def test_foreign_delete_is_not_found(self, client, alice_headers, bob_headers):
        chat = create_chat(client, alice_headers)

        response = client.delete(f"/chats/{chat['id']}", headers=bob_headers)

        assert response.status_code == 404
        # Chat still exists for its owner
        assert client.get(f"/chats/{chat['id']}", headers=alice_headers).status_code == 200

    def test_foreign_update_is_not_found(self, client, alice_headers, bob_headers, test_engine):
        chat = create_chat(client, alice_headers, "mine")

        response = client.put(f"/chats/{chat['id']}", headers=bob_headers, json={"title": "theirs"})

        assert response.status_code == 404
        with Session(test_engine) as db:
            assert db.get(Chat, chat["id"]).title == "mine"

    def test_foreign_and_missing_responses_match(self, client, alice_headers, bob_headers):
        chat = create_chat(client, alice_headers)

        foreign = client.delete(f"/chats/{chat['id']}", headers=bob_headers)
        missing = client.delete("/chats/9999", headers=bob_headers)

        assert foreign.status_code == missing.status_code == 404
        assert foreign.json() == missing.json()

    def test_foreign_get_is_not_found(self, client, alice_headers, bob_headers):
        chat = create_chat(client, alice_headers)

        assert client.get(f"/chats/{chat['id']}", headers=bob_headers).status_code == 404

    def test_admin_has_no_chat_bypass(self, client, alice_headers, admin_headers):
        """Chat routes are owner-only, whatever the caller's role."""
        chat = create_chat(client, alice_headers)

        assert client.delete(f"/chats/{chat['id']}", headers=admin_headers).status_code == 404
