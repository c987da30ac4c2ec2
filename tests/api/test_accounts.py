"""Account administration API tests (in-memory SQLite, admin bearer token from conftest)."""

import pytest
from httpx import AsyncClient

from app.infrastructure.security import create_access_token

BASE = "/api/v1/flower/user"

pytestmark = pytest.mark.requires_db


def _payload(**overrides) -> dict:
    body = {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "email": "ada@example.com",
        "password": "password-123",
        "password_confirmation": "password-123",
        "roles": ["member"],
    }
    body.update(overrides)
    return body


async def _create(client: AsyncClient, headers: dict[str, str], **overrides) -> dict:
    response = await client.post(BASE, json=_payload(**overrides), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def test_requires_bearer_token(client: AsyncClient, admin_id: int) -> None:
    """Routes reject missing or invalid tokens with 401."""
    response = await client.get(BASE)
    assert response.status_code == 401
    assert response.json()["error"] == "AUTHENTICATION_ERROR"

    response = await client.get(BASE, headers={"Authorization": "Bearer nope"})
    assert response.status_code == 401


async def test_token_of_unknown_account_is_rejected(client: AsyncClient, admin_id: int) -> None:
    headers = {"Authorization": f"Bearer {create_access_token(999)}"}
    response = await client.get(BASE, headers=headers)
    assert response.status_code == 401


async def test_create_returns_201_without_secrets(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    data = await _create(client, auth_headers, permissions=["view backend"])

    assert data["id"] == 2
    assert data["full_name"] == "Ada Lovelace"
    assert data["roles"] == ["member"]
    assert data["permissions"] == ["view backend"]
    assert data["active"] is False
    assert data["confirmed"] is False
    assert "password" not in data
    assert "confirmation_code" not in data


async def test_create_without_roles_returns_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(BASE, json=_payload(roles=[]), headers=auth_headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["message_key"] == "exceptions.backend.access.flower_rates.role_needed_create"


async def test_create_password_mismatch_returns_422(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    response = await client.post(
        BASE, json=_payload(password_confirmation="different-123"), headers=auth_headers
    )
    assert response.status_code == 422
    assert response.json()["error"] == "VALIDATION_ERROR"


async def test_create_duplicate_email_returns_400(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    await _create(client, auth_headers)
    response = await client.post(
        BASE, json=_payload(email="ADA@example.com"), headers=auth_headers
    )
    assert response.status_code == 400
    assert response.json()["message_key"].endswith(".email_error")


async def test_show_and_not_found(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)

    response = await client.get(f"{BASE}/{created['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["email"] == "ada@example.com"

    response = await client.get(
        f"{BASE}/999", headers={**auth_headers, "X-Request-ID": "trace-404"}
    )
    assert response.status_code == 404
    assert response.json()["error"] == "RESOURCE_NOT_FOUND"
    assert response.json()["request_id"] == "trace-404"


async def test_listings_split_active_inactive_deleted(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    inactive = await _create(client, auth_headers, email="in@example.com")
    deleted = await _create(client, auth_headers, email="del@example.com", active=True)
    await client.delete(f"{BASE}/{deleted['id']}", headers=auth_headers)

    active = (await client.get(BASE, headers=auth_headers)).json()
    deactivated = (await client.get(f"{BASE}/deactivated", headers=auth_headers)).json()
    trashed = (await client.get(f"{BASE}/deleted", headers=auth_headers)).json()

    assert [a["id"] for a in active["items"]] == [1]
    assert [a["id"] for a in deactivated["items"]] == [inactive["id"]]
    assert [a["id"] for a in trashed["items"]] == [deleted["id"]]
    assert trashed["items"][0]["deleted_at"] is not None


async def test_listing_paging_and_bad_sort(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    for i in range(3):
        await _create(client, auth_headers, email=f"u{i}@example.com")

    response = await client.get(
        f"{BASE}/deactivated",
        params={"per_page": 2, "page": 2, "order_by": "email", "sort": "asc"},
        headers=auth_headers,
    )
    page = response.json()
    assert response.status_code == 200
    assert (page["total"], page["per_page"], page["last_page"]) == (3, 2, 2)
    assert [a["email"] for a in page["items"]] == ["u2@example.com"]

    response = await client.get(BASE, params={"order_by": "password"}, headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "order_by"}


async def test_update_replaces_roles(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)
    response = await client.patch(
        f"{BASE}/{created['id']}",
        json={
            "first_name": "Ada",
            "last_name": "King",
            "email": "ada@example.com",
            "roles": ["administrator"],
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["roles"] == ["administrator"]
    assert response.json()["last_name"] == "King"


async def test_change_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)
    response = await client.patch(
        f"{BASE}/{created['id']}/password",
        json={"password": "brand-new-pass", "password_confirmation": "brand-new-pass"},
        headers=auth_headers,
    )
    assert response.status_code == 200


async def test_mark_and_self_deactivation(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    created = await _create(client, auth_headers)

    response = await client.post(f"{BASE}/{created['id']}/mark/1", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["active"] is True

    response = await client.post(f"{BASE}/1/mark/0", headers=auth_headers)
    assert response.status_code == 403
    assert response.json()["error"] == "SELF_ACTION_FORBIDDEN"

    response = await client.post(f"{BASE}/{created['id']}/mark/2", headers=auth_headers)
    assert response.status_code == 422


async def test_confirm_unconfirm_rules(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)
    url = f"{BASE}/{created['id']}"

    assert (await client.post(f"{url}/confirm", headers=auth_headers)).status_code == 200
    again = await client.post(f"{url}/confirm", headers=auth_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "ALREADY_CONFIRMED"

    assert (await client.post(f"{url}/unconfirm", headers=auth_headers)).status_code == 200
    again = await client.post(f"{url}/unconfirm", headers=auth_headers)
    assert again.status_code == 409
    assert again.json()["error"] == "NOT_CONFIRMED"

    admin = await client.post(f"{BASE}/1/unconfirm", headers=auth_headers)
    assert admin.status_code == 403
    assert admin.json()["error"] == "PROTECTED_ACCOUNT"


async def test_resend_confirmation(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    created = await _create(client, auth_headers)
    response = await client.post(
        f"{BASE}/{created['id']}/confirmation-email", headers=auth_headers
    )
    assert response.status_code == 202

    response = await client.post(f"{BASE}/1/confirmation-email", headers=auth_headers)
    assert response.status_code == 409


async def test_delete_restore_force_delete(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    created = await _create(client, auth_headers)
    url = f"{BASE}/{created['id']}"

    response = await client.delete(f"{url}/delete", headers=auth_headers)
    assert response.status_code == 409
    assert response.json()["message_key"].endswith(".delete_first")

    assert (await client.post(f"{url}/restore", headers=auth_headers)).status_code == 409

    response = await client.delete(url, headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deleted_at"] is not None
    assert (await client.delete(url, headers=auth_headers)).status_code == 409

    response = await client.post(f"{url}/restore", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["deleted_at"] is None

    await client.delete(url, headers=auth_headers)
    response = await client.delete(f"{url}/delete", headers=auth_headers)
    assert response.status_code == 200
    assert response.json()["id"] == created["id"]

    assert (await client.get(url, headers=auth_headers)).status_code == 404
    assert (await client.delete(f"{url}/delete", headers=auth_headers)).status_code == 409


async def test_deactivated_actor_loses_access(
    client: AsyncClient, auth_headers: dict[str, str]
) -> None:
    other = await _create(client, auth_headers, roles=["administrator"], active=True)
    other_headers = {"Authorization": f"Bearer {create_access_token(other['id'])}"}
    assert (await client.get(BASE, headers=other_headers)).status_code == 200

    await client.post(f"{BASE}/{other['id']}/mark/0", headers=auth_headers)

    assert (await client.get(BASE, headers=other_headers)).status_code == 401
