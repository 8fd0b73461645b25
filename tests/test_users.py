from conftest import USER_PASSWORD, bearer, login, register


def test_list_users_paginated(client, admin_headers, user):
    response = client.get(
        "/v1/users", params={"search": user["email"], "limit": 5}, headers=admin_headers
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["totalResults"] == 1
    assert data["results"][0]["email"] == user["email"]
    assert "passwordHash" not in data["results"][0]


def test_list_users_filter_by_role(client, admin_headers):
    data = client.get("/v1/users", params={"role": "admin"}, headers=admin_headers).json()["data"]

    assert data["totalResults"] >= 1
    assert all(u["role"] == "admin" for u in data["results"])


def test_get_user(client, admin_headers, user):
    response = client.get(f"/v1/users/{user['user']['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["data"]["user"]["name"] == "Test User"


def test_get_missing_user(client, admin_headers):
    response = client.get("/v1/users/999999", headers=admin_headers)

    assert response.status_code == 404
    assert response.json()["message"] == "User not found"


def test_promote_user_to_admin(client, admin_headers, user):
    response = client.put(
        f"/v1/users/{user['user']['id']}",
        json={"role": "admin", "name": "Promoted"},
        headers=admin_headers,
    )

    assert response.status_code == 200
    assert response.json()["data"]["user"]["role"] == "admin"

    # Role is read from the database on every request, not from the token
    promoted = bearer(user["tokens"]["access"]["token"])
    assert client.get("/v1/users", headers=promoted).status_code == 200


def test_update_email_conflict(client, admin_headers, user):
    other = register(client)

    response = client.put(
        f"/v1/users/{user['user']['id']}",
        json={"email": other["email"]},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Email already taken"


def test_deactivated_user_cannot_log_in_or_use_tokens(client, admin_headers, user):
    response = client.put(
        f"/v1/users/{user['user']['id']}",
        json={"status": "inactive"},
        headers=admin_headers,
    )
    assert response.status_code == 200

    assert login(client, user["email"], USER_PASSWORD).status_code == 401
    assert client.get("/v1/home", headers=bearer(user["tokens"]["access"]["token"])).status_code == 401


def test_delete_user(client, admin_headers, user):
    response = client.delete(f"/v1/users/{user['user']['id']}", headers=admin_headers)

    assert response.status_code == 200
    assert client.get(f"/v1/users/{user['user']['id']}", headers=admin_headers).status_code == 404
    assert login(client, user["email"]).status_code == 401


def test_user_routes_require_admin(client, user, user_headers):
    assert client.get(f"/v1/users/{user['user']['id']}", headers=user_headers).status_code == 403
    assert client.delete(f"/v1/users/{user['user']['id']}", headers=user_headers).status_code == 403


def test_update_rejects_null_for_required_field(client, admin_headers, user):
    response = client.put(
        f"/v1/users/{user['user']['id']}",
        json={"name": None},
        headers=admin_headers,
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"
    assert client.get(
        f"/v1/users/{user['user']['id']}", headers=admin_headers
    ).json()["data"]["user"]["name"] == "Test User"


def test_concurrent_duplicate_registration_is_a_conflict(client, user, monkeypatch):
    from inkpost.services import user_service

    async def never_taken(db, email, exclude_user_id=None):
        return False

    # Simulate the other request inserting between the check and the insert
    monkeypatch.setattr(user_service, "is_email_taken", never_taken)

    response = client.post(
        "/v1/auth/register",
        json={"name": "Twin", "email": user["email"], "password": USER_PASSWORD},
    )

    assert response.status_code == 400
    assert response.json()["message"] == "Email already taken"
