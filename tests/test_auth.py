import pytest

OWNER_PASSWORD = "Owner#2024"


def register(client, username, email, password):
    return client.post("/api/v1/auth/register", json={"username": username, "email": email, "password": password})


def test_first_account_is_owner_then_staff(client):
    first = register(client, "meena", "meena@spicehouse.in", OWNER_PASSWORD)
    second = register(client, "ravi", "ravi@spicehouse.in", "Staff#2024")

    assert first.status_code == 201
    assert first.json()["role"] == "owner"
    assert second.json()["role"] == "staff"
    assert "hashed_password" not in first.json()


def test_duplicate_username_is_rejected(client, owner_headers):
    response = register(client, "meena", "other@spicehouse.in", OWNER_PASSWORD)
    assert response.status_code == 400
    assert response.json()["message"] == "Username or email already registered"


@pytest.mark.parametrize("password", ["Sh#1", "alllower#2024", "NoDigits#here", "NoSpecial2024", "Has Space#1"])
def test_weak_passwords_are_rejected(client, password):
    response = register(client, "kumar", "kumar@spicehouse.in", password)
    assert response.status_code == 422
    assert response.json()["code"] == "REQUEST_VALIDATION_ERROR"


def test_wrong_password_is_401(client, owner_headers):
    response = client.post("/api/v1/auth/token", data={"username": "meena", "password": "Wrong#2024"})
    assert response.status_code == 401
    assert response.json()["message"] == "Incorrect username or password"


def test_login_returns_user_and_me_matches(client):
    register(client, "meena", "meena@spicehouse.in", OWNER_PASSWORD)
    login = client.post("/api/v1/auth/token", data={"username": "meena", "password": OWNER_PASSWORD})

    body = login.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["username"] == "meena"

    me = client.get("/api/v1/auth/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["email"] == "meena@spicehouse.in"


def test_garbage_token_is_401(client):
    response = client.get("/api/v1/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert response.status_code == 401
    assert response.json()["message"] == "Could not validate credentials"


def test_health_is_public(client):
    assert client.get("/health").json()["status"] == "healthy"
