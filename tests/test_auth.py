import jwt

from conftest import make_token


def test_me_returns_token_claims(client):
    token = make_token(role="admin", sub="abc-123", email="owner@example.com")

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "abc-123"
    assert body["email"] == "owner@example.com"
    assert body["app_metadata"] == {"role": "admin"}


def test_missing_header(client):
    assert client.get("/auth/me").status_code == 401


def test_malformed_header(client):
    response = client.get("/auth/me", headers={"Authorization": "Token abc"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid authorization header"


def test_expired_token(client):
    response = client.get("/auth/me", headers={"Authorization": f"Bearer {make_token(expires_in=-60)}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"


def test_token_signed_with_another_secret(client):
    token = jwt.encode(
        {"sub": "x", "aud": "authenticated"}, "some-other-secret-that-is-long-enough", algorithm="HS256"
    )

    response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid token"


def test_non_admin_is_denied_on_admin_routes(client, customer_headers):
    response = client.get("/admin/vouchers", headers=customer_headers)

    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied"
