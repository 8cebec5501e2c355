"""Bearer token gate on the products router."""

from datetime import timedelta

from catalog_admin.core.tokens import TokenCodec
from catalog_admin.schemas.auth import IdentityClaim

PRODUCTS = "/api/v1/products"


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def test_missing_header_is_401(client):
    response = client.get(PRODUCTS)
    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. No token provided."}


def test_non_bearer_scheme_is_401(client, codec):
    token = codec.issue(IdentityClaim(id="a", email="a@example.com", role="admin"))
    response = client.get(PRODUCTS, headers={"Authorization": f"Basic {token}"})
    assert response.status_code == 401
    assert response.json() == {"error": "Access denied. No token provided."}


def test_bearer_without_token_is_401(client):
    response = client.get(PRODUCTS, headers={"Authorization": "Bearer "})
    assert response.status_code == 401


def test_expired_token_is_401_with_expired_message(client, settings):
    expired = TokenCodec(settings.JWT_SECRET, ttl=timedelta(seconds=-5)).issue(
        IdentityClaim(id="a", email="a@example.com", role="admin")
    )
    response = client.get(PRODUCTS, headers=_bearer(expired))
    assert response.status_code == 401
    assert response.json() == {"error": "Token expired."}


def test_foreign_token_is_401_with_invalid_message(client):
    foreign = TokenCodec("someone-elses-secret").issue(
        IdentityClaim(id="a", email="a@example.com", role="admin")
    )
    response = client.get(PRODUCTS, headers=_bearer(foreign))
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid or malformed token."}


def test_wrong_role_is_403(client, codec):
    token = codec.issue(IdentityClaim(id="a", email="a@example.com", role="editor"))
    response = client.get(PRODUCTS, headers=_bearer(token))
    assert response.status_code == 403
    assert "error" in response.json()


def test_missing_role_is_403_not_full_access(client, codec):
    token = codec.issue(IdentityClaim(id="a", email="a@example.com"))
    response = client.get(PRODUCTS, headers=_bearer(token))
    assert response.status_code == 403


def test_admin_token_is_allowed(client, admin_headers):
    response = client.get(PRODUCTS, headers=admin_headers)
    assert response.status_code == 200
    assert response.json() == {"products": []}


def test_every_product_route_is_guarded(client):
    calls = [
        ("get", f"{PRODUCTS}"),
        ("get", f"{PRODUCTS}/1"),
        ("get", f"{PRODUCTS}/slug/blue-mug"),
        ("get", f"{PRODUCTS}/images"),
        ("post", f"{PRODUCTS}"),
        ("put", f"{PRODUCTS}/1"),
        ("delete", f"{PRODUCTS}/1"),
        ("post", f"{PRODUCTS}/upload"),
        ("delete", f"{PRODUCTS}/image?filePath=products/a.png"),
    ]
    for method, url in calls:
        response = getattr(client, method)(url)
        assert response.status_code == 401, (method, url)


def test_health_check_is_public(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"
