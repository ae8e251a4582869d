"""Request helpers shared by the API tests."""

from __future__ import annotations

from flask.testing import FlaskClient


def register(
    client: FlaskClient,
    first_name: str = "Ann",
    last_name: str = "Lee",
    email: str = "ann@x.com",
    password: str = "secret",
    phone: str | None = "555-0100",
):
    return client.post(
        "/api/register",
        json={
            "firstName": first_name,
            "lastName": last_name,
            "email": email,
            "password": password,
            "phone": phone,
        },
    )


def register_token(client: FlaskClient, **kwargs) -> str:
    response = register(client, **kwargs)
    assert response.status_code == 201
    return response.get_json()["token"]


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def post_review(
    client: FlaskClient,
    token: str,
    title: str = "Great",
    content: str = "Nice place",
    rating=5,
    **extra,
):
    payload = {"title": title, "content": content, "rating": rating, **extra}
    return client.post("/api/reviews", json=payload, headers=bearer(token))
