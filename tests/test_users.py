"""
Chat API - User Management Tests

Profile and admin variants of user update/delete, and cascade deletion.

Run with: pytest tests/test_users.py -v
"""

from sqlmodel import Session, select

from chatapi.db.models import Chat, Message, RoleRecord, User, UserRole
from tests.conftest import auth_headers, login_user


class TestGetUser:

    def test_get_user(self, client, alice_headers, bob):
        response = client.get(f"/users/{bob.id}", headers=alice_headers)

        assert response.status_code == 200
        assert response.json()["username"] == "bob"
        assert "password_hash" not in response.json()

    def test_get_missing_user(self, client, alice_headers):
        response = client.get("/users/9999", headers=alice_headers)

        assert response.status_code == 404

    def test_get_user_requires_token(self, client, bob):
        response = client.get(f"/users/{bob.id}")

        assert response.status_code == 403


class TestProfileUpdate:

    def test_update_own_profile(self, client, alice, alice_headers):
        response = client.put(
            f"/users/profile/{alice.id}",
            headers=alice_headers,
            json={"username": "alice2", "email": "alice2@x.com"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["username"] == "alice2"
        assert response.json()["user"]["email"] == "alice2@x.com"
        assert login_user(client, "alice2", "p1") is not None

    def test_update_other_profile_forbidden(self, client, alice_headers, bob):
        response = client.put(
            f"/users/profile/{bob.id}",
            headers=alice_headers,
            json={"username": "hacked"},
        )

        assert response.status_code == 403

    def test_update_without_fields(self, client, alice, alice_headers):
        response = client.put(f"/users/profile/{alice.id}", headers=alice_headers, json={})

        assert response.status_code == 400

    def test_update_to_taken_username(self, client, alice, alice_headers, bob):
        response = client.put(
            f"/users/profile/{alice.id}",
            headers=alice_headers,
            json={"username": "bob"},
        )

        assert response.status_code == 409

    def test_update_profile_of_deleted_account(self, client, alice, alice_headers, test_engine):
        with Session(test_engine) as db:
            for assignment in db.exec(select(UserRole).where(UserRole.user_id == alice.id)).all():
                db.delete(assignment)
            db.delete(db.get(User, alice.id))
            db.commit()

        response = client.put(
            f"/users/profile/{alice.id}",
            headers=alice_headers,
            json={"username": "ghost"},
        )

        assert response.status_code == 404


class TestAdminUpdate:

    def test_admin_updates_user(self, client, admin_headers, alice):
        response = client.put(
            f"/users/{alice.id}",
            headers=admin_headers,
            json={"email": "new@x.com"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["email"] == "new@x.com"

    def test_admin_role_change_rewrites_assignment(self, client, admin_headers, alice, test_engine):
        client.put(f"/users/{alice.id}", headers=admin_headers, json={"role": "admin"})

        with Session(test_engine) as db:
            assignments = db.exec(select(UserRole).where(UserRole.user_id == alice.id)).all()
            assert len(assignments) == 1
            assert db.get(RoleRecord, assignments[0].role_id).role_name == "admin"

    def test_admin_update_unknown_role(self, client, admin_headers, alice):
        response = client.put(f"/users/{alice.id}", headers=admin_headers, json={"role": "owner"})

        assert response.status_code == 400

    def test_admin_update_without_fields(self, client, admin_headers, alice):
        response = client.put(f"/users/{alice.id}", headers=admin_headers, json={})

        assert response.status_code == 400

    def test_admin_update_missing_user(self, client, admin_headers):
        response = client.put("/users/9999", headers=admin_headers, json={"username": "x"})

        assert response.status_code == 404


def seed_content(client, headers) -> tuple:
    chat = client.post("/chats", headers=headers, json={"title": "Alice chat"}).json()
    message = client.post(
        "/messages", headers=headers, json={"chat_id": chat["id"], "content": "hi"}
    ).json()["messageData"]
    return chat["id"], message["id"]


class TestAccountDeletion:

    def test_delete_own_account_cascades(self, client, alice, alice_headers, bob, test_engine):
        chat_id, message_id = seed_content(client, alice_headers)

        # A message from someone else inside alice's chat goes too
        with Session(test_engine) as db:
            db.add(Message(chat_id=chat_id, user_id=bob.id, content="from bob"))
            db.commit()

        response = client.delete(f"/users/profile/{alice.id}", headers=alice_headers)
        assert response.status_code == 200

        with Session(test_engine) as db:
            assert db.get(User, alice.id) is None
            assert db.get(Chat, chat_id) is None
            assert db.get(Message, message_id) is None
            assert db.exec(select(Message).where(Message.chat_id == chat_id)).all() == []
            assert db.exec(select(UserRole).where(UserRole.user_id == alice.id)).all() == []
            assert db.get(User, bob.id) is not None

    def test_deleted_users_chats_are_not_found(self, client, alice, alice_headers):
        chat_id, _ = seed_content(client, alice_headers)

        client.delete(f"/users/profile/{alice.id}", headers=alice_headers)

        # The token outlives the account; the chat is gone regardless
        assert client.get(f"/chats/{chat_id}", headers=alice_headers).status_code == 404
        assert client.get("/messages", headers=alice_headers, params={"chat_id": chat_id}).status_code == 404

    def test_delete_other_account_forbidden(self, client, alice_headers, bob):
        response = client.delete(f"/users/profile/{bob.id}", headers=alice_headers)

        assert response.status_code == 403

    def test_delete_own_account_twice(self, client, alice, alice_headers):
        assert client.delete(f"/users/profile/{alice.id}", headers=alice_headers).status_code == 200
        assert client.delete(f"/users/profile/{alice.id}", headers=alice_headers).status_code == 404

    def test_admin_deletes_any_user(self, client, admin_headers, alice, alice_headers, test_engine):
        chat_id, _ = seed_content(client, alice_headers)

        response = client.delete(f"/users/{alice.id}", headers=admin_headers)
        assert response.status_code == 200

        with Session(test_engine) as db:
            assert db.get(User, alice.id) is None
            assert db.get(Chat, chat_id) is None

        assert client.delete(f"/users/{alice.id}", headers=admin_headers).status_code == 404

    def test_deleted_account_token_cannot_reach_next_user(self, client):
        alice = client.post(
            "/register",
            json={"username": "alice", "password": "p1", "email": "a@x.com"},
        ).json()
        old_headers = auth_headers(alice["token"])
        assert client.delete(f"/users/profile/{alice['user']['id']}", headers=old_headers).status_code == 200

        carol = client.post(
            "/register",
            json={"username": "carol", "password": "p3", "email": "c@x.com"},
        ).json()
        carol_headers = auth_headers(carol["token"])
        chat = client.post("/chats", headers=carol_headers, json={"title": "carol secret"}).json()

        # Ids are never handed out twice
        assert carol["user"]["id"] != alice["user"]["id"]
        assert client.get("/chats", headers=old_headers).json() == []
        assert client.get(f"/chats/{chat['id']}", headers=old_headers).status_code == 404
        assert client.put(
            f"/users/profile/{carol['user']['id']}", headers=old_headers, json={"username": "x"}
        ).status_code == 403
