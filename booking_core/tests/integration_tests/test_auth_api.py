def register(client, email="new.user@example.com", password="secret1"):
    return client.post(
        "/api/auth/register",
        json={"name": "New User", "email": email, "password": password, "phone": "+1 (555) 010-2000"},
    )


def test_register_returns_token_and_customer(client):
    response = register(client)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["token"]
    assert data["user"]["role"] == "customer"
    assert data["user"]["email"] == "new.user@example.com"
    assert "_id" in data["user"]
    assert "password" not in data["user"]


def test_register_rejects_duplicate_email(client, customer):
    response = register(client, email=customer.email)

    assert response.status_code == 400
    assert response.json()["message"] == "User already exists with this email"


def test_register_validation_errors(client):
    response = client.post("/api/auth/register", json={"name": "X", "email": "not-an-email", "password": "123"})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation error"
    assert {error["field"] for error in body["errors"]} == {"name", "email", "password"}


def test_login_and_me(client, customer):
    response = client.post("/api/auth/login", json={"email": "JANE@example.com", "password": "password123"})
    assert response.status_code == 200
    token = response.json()["data"]["token"]

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.json()["data"]["user"]["email"] == customer.email
    assert me.json()["data"]["user"]["lastLogin"] is not None


def test_login_with_wrong_password(client, customer):
    response = client.post("/api/auth/login", json={"email": customer.email, "password": "wrong-password"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


def test_missing_and_invalid_tokens(client):
    assert client.get("/api/auth/me").json()["message"] == "Access denied. No token provided."

    response = client.get("/api/auth/me", headers={"Authorization": "Bearer forged"})
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token"


def test_logout_ends_session(client, customer_headers):
    assert client.post("/api/auth/logout", headers=customer_headers).status_code == 200

    assert client.get("/api/auth/me", headers=customer_headers).status_code == 401


def test_change_password(client, customer, customer_headers, login_as):
    other_device = login_as(customer.email)

    wrong = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "nope", "newPassword": "newsecret"},
        headers=customer_headers,
    )
    assert wrong.status_code == 400
    assert wrong.json()["message"] == "Current password is incorrect"

    changed = client.put(
        "/api/auth/change-password",
        json={"currentPassword": "password123", "newPassword": "newsecret"},
        headers=customer_headers,
    )
    assert changed.status_code == 200
    assert client.get("/api/auth/me", headers=customer_headers).status_code == 200
    assert client.get("/api/auth/me", headers=other_device).status_code == 401

    relogin = client.post("/api/auth/login", json={"email": customer.email, "password": "newsecret"})
    assert relogin.status_code == 200


def test_profile_update_merges_address(client, customer_headers):
    client.put(
        "/api/users/profile",
        json={"address": {"street": "1 Main St", "city": "Dallas"}},
        headers=customer_headers,
    )
    response = client.put(
        "/api/users/profile",
        json={"name": "Jane T.", "address": {"zipCode": "75201"}},
        headers=customer_headers,
    )

    user = response.json()["data"]["user"]
    assert user["name"] == "Jane T."
    assert user["address"] == {"street": "1 Main St", "city": "Dallas", "zipCode": "75201"}


def test_customer_cannot_open_admin_dashboard(client, customer_headers):
    response = client.get("/api/admin/dashboard", headers=customer_headers)

    assert response.status_code == 403
    assert response.json()["message"] == "Access denied. Insufficient permissions."
