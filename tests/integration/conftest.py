import pytest
from protean import current_domain


@pytest.fixture(autouse=True)
def _storefront(identity_bed, ordering_bed):
    """Run against both domains and wipe their data afterwards."""
    yield

    for bed in (identity_bed, ordering_bed):
        with bed.domain_context():
            for _, provider in current_domain.providers.items():
                provider._data_reset()
            current_domain.event_store.store._data_reset()


@pytest.fixture()
def client():
    from app import app
    from fastapi.testclient import TestClient

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture()
def shopper(identity_provider):
    token = identity_provider.issue("user-int-001", email="asha@example.com")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def desk_lamp(catalogue):
    from uuid import uuid4

    return catalogue.add_product(str(uuid4()), "Desk Lamp", 50.0).product_id
