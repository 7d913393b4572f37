import pytest

from authvault.domain.models.client_domain_model import Scope
from tests.conftest import bearer


async def _create(client, admin_headers, name="Shop", scope="initiate_transaction", owner="acme"):
    response = await client.post(
        "/admin/clients", json={"name": name, "scope": scope, "owner": owner}, headers=admin_headers
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_admin_requires_password(client):
    missing = await client.get("/admin/clients")
    wrong = await client.get("/admin/clients", headers={"X-Admin-Password": "nope"})

    assert missing.status_code == 401
    assert wrong.status_code == 401
    assert wrong.json() == {"error": "Invalid administrative password", "code": "INVALID_CREDENTIALS"}


@pytest.mark.asyncio
async def test_created_client_can_obtain_token(client, admin_headers):
    created = await _create(client, admin_headers)

    assert created["scope"] == "initiate_transaction"
    assert created["is_active"] is True
    assert created["client_secret"]

    response = await client.post("/oauth/token", json={
        "grant_type": "client_credentials",
        "client_id": created["client_id"],
        "client_secret": created["client_secret"],
        "scope": "initiate_transaction",
    })
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_get_client_hides_secret(client, admin_headers):
    created = await _create(client, admin_headers)

    response = await client.get(f"/admin/clients/{created['client_id']}", headers=admin_headers)

    assert response.status_code == 200
    assert "client_secret" not in response.json()
    assert response.json()["name"] == "Shop"


@pytest.mark.asyncio
async def test_list_clients_filters_by_owner(client, admin_headers):
    await _create(client, admin_headers, name="A", owner="acme")
    await _create(client, admin_headers, name="B", owner="acme")
    await _create(client, admin_headers, name="C", owner="globex")

    response = await client.get("/admin/clients", params={"owner": "acme", "size": 10}, headers=admin_headers)

    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 2
    assert {item["name"] for item in page["items"]} == {"A", "B"}


@pytest.mark.asyncio
async def test_deactivated_client_cannot_obtain_token(client, admin_headers):
    created = await _create(client, admin_headers)

    response = await client.patch(
        f"/admin/clients/{created['client_id']}", json={"is_active": False}, headers=admin_headers
    )
    assert response.status_code == 200
    assert response.json()["is_active"] is False

    response = await client.post("/oauth/token", json={
        "grant_type": "client_credentials",
        "client_id": created["client_id"],
        "client_secret": created["client_secret"],
        "scope": "initiate_transaction",
    })
    assert response.status_code == 401
    assert response.json()["code"] == "CLIENT_INACTIVE"


@pytest.mark.asyncio
async def test_scope_cannot_be_updated(client, admin_headers):
    created = await _create(client, admin_headers)

    response = await client.patch(
        f"/admin/clients/{created['client_id']}", json={"scope": "execute_transaction"}, headers=admin_headers
    )

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_empty_update_is_rejected(client, admin_headers):
    created = await _create(client, admin_headers)

    response = await client.patch(f"/admin/clients/{created['client_id']}", json={}, headers=admin_headers)

    assert response.status_code == 400
    assert response.json()["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_rotate_secret_invalidates_old_secret(client, admin_headers):
    created = await _create(client, admin_headers)

    response = await client.post(f"/admin/clients/{created['client_id']}/rotate-secret", headers=admin_headers)
    assert response.status_code == 200
    new_secret = response.json()["new_client_secret"]
    assert new_secret != created["client_secret"]

    def token_request(secret):
        return {
            "grant_type": "client_credentials",
            "client_id": created["client_id"],
            "client_secret": secret,
            "scope": "initiate_transaction",
        }

    assert (await client.post("/oauth/token", json=token_request(created["client_secret"]))).status_code == 401
    assert (await client.post("/oauth/token", json=token_request(new_secret))).status_code == 200


@pytest.mark.asyncio
async def test_delete_client(client, admin_headers):
    created = await _create(client, admin_headers)

    response = await client.delete(f"/admin/clients/{created['client_id']}", headers=admin_headers)
    assert response.status_code == 204

    response = await client.get(f"/admin/clients/{created['client_id']}", headers=admin_headers)
    assert response.status_code == 404
    assert response.json()["code"] == "RESOURCE_NOT_FOUND"


@pytest.mark.asyncio
async def test_unknown_client_is_404(client, admin_headers):
    response = await client.post("/admin/clients/missing/rotate-secret", headers=admin_headers)

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_transactions_and_stats(client, admin_headers, make_client, get_token):
    initiator, initiator_secret = await make_client(Scope.INITIATE_TRANSACTION, owner="acme")
    executor, executor_secret = await make_client(Scope.EXECUTE_TRANSACTION, owner="acme")
    initiator_token = await get_token(initiator, initiator_secret, Scope.INITIATE_TRANSACTION)
    executor_token = await get_token(executor, executor_secret, Scope.EXECUTE_TRANSACTION)

    tokens = []
    for _ in range(2):
        response = await client.post(
            "/transaction/initiate", json={"client_id": initiator}, headers=bearer(initiator_token)
        )
        tokens.append(response.json()["transaction_token"])
    await client.post(
        "/transaction/validate", json={"transaction_token": tokens[0]}, headers=bearer(executor_token)
    )

    response = await client.get("/admin/transactions", params={"owner": "acme"}, headers=admin_headers)
    assert response.status_code == 200
    page = response.json()
    assert page["total"] == 2
    statuses = {item["transaction_token"]: item["status"] for item in page["items"]}
    assert statuses == {tokens[0]: "validated", tokens[1]: "initiated"}

    response = await client.get("/admin/transactions", params={"owner": "globex"}, headers=admin_headers)
    assert response.json()["total"] == 0

    response = await client.get("/admin/stats", params={"owner": "acme"}, headers=admin_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["active_clients"] == 2
    assert stats["transactions_today"] == 2
    assert stats["success_rate"] == 50.0
    assert stats["avg_response_ms"] >= 0


@pytest.mark.asyncio
async def test_stats_without_transactions(client, admin_headers):
    response = await client.get("/admin/stats", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["success_rate"] == 0.0
    assert response.json()["transactions_today"] == 0
