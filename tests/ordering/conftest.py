import pytest
from protean import current_domain


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        for _, provider in current_domain.providers.items():
            provider._data_reset()
        current_domain.event_store.store._data_reset()


@pytest.fixture()
def shipping():
    """Address and phone fields accepted by PlaceOrder."""
    return {
        "name": "Asha Rao",
        "address_line1": "12 MG Road",
        "address_line2": "Flat 4B",
        "city": "Bengaluru",
        "state": "Karnataka",
        "pincode": "560001",
        "country": "India",
        "phone": "9876543210",
    }
