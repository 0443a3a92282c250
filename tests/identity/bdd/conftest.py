"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from identity.api.routes import router
from pytest_bdd import given, parsers, then
from shared.api import register_error_handlers


@pytest.fixture()
def client():
    app = FastAPI()
    app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


@pytest.fixture()
def context():
    """Mutable scenario state shared between steps."""
    return {}


@pytest.fixture()
def address_payload():
    """Build a valid address body for the given name."""

    def _payload(name):
        return {
            "name": name,
            "addressLine1": "12 MG Road",
            "city": "Bengaluru",
            "state": "Karnataka",
            "pincode": "560001",
            "phone": "9876543210",
        }

    return _payload


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a signed-in shopper", target_fixture="auth")
def _(identity_provider):
    token = identity_provider.issue("user-bdd-001")
    return {"Authorization": f"Bearer {token}"}


@given(parsers.cfparse("the shopper has saved {count:d} addresses"))
def _(client, auth, address_payload, count):
    for n in range(count):
        response = client.post("/address", json=address_payload(f"Address {n}"), headers=auth)
        assert response.status_code == 201


@given(parsers.cfparse("address {index:d} is the default"))
def _(client, auth, index):
    response = client.put(f"/address/default/{index}", headers=auth)
    assert response.status_code == 200


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the request fails with status {status:d}"))
def _(context, status):
    assert context["response"].status_code == status
    assert context["response"].json()["success"] is False


@then(parsers.cfparse("the shopper still has {count:d} addresses"))
@then(parsers.cfparse("the shopper has {count:d} addresses"))
def _(client, auth, count):
    response = client.get("/address", headers=auth)
    assert len(response.json()["addresses"]) == count


@then(parsers.cfparse("the default address index is {index:d}"))
def _(client, auth, index):
    response = client.get("/address", headers=auth)
    assert response.json()["default_address_index"] == index


@then(parsers.cfparse("the address listing is empty with default index {index:d}"))
def _(client, auth, index):
    body = client.get("/address", headers=auth).json()
    assert body["addresses"] == []
    assert body["default_address_index"] == index
