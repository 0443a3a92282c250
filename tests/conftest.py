import os
from pathlib import Path

import pytest
from protean.integrations.pytest import DomainFixture


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the configuration environment before any domain module is imported.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in test_path:
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Domains
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def identity_bed():
    from identity.domain import identity

    bed = DomainFixture(identity)
    bed.setup()
    yield bed
    bed.teardown()


@pytest.fixture(scope="session")
def ordering_bed():
    from ordering.domain import ordering

    bed = DomainFixture(ordering)
    bed.setup()
    yield bed
    bed.teardown()


# ---------------------------------------------------------------------------
# Adapters
# ---------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _adapters():
    """Give every test fresh fake collaborators."""
    from identity.provider import reset_identity_provider
    from ordering.catalogue import reset_catalogue
    from ordering.notifier import reset_notifier

    reset_identity_provider()
    reset_catalogue()
    reset_notifier()
    yield
    reset_identity_provider()
    reset_catalogue()
    reset_notifier()


@pytest.fixture()
def catalogue(_adapters):
    from ordering.catalogue import get_catalogue

    return get_catalogue()


@pytest.fixture()
def notifier(_adapters):
    from ordering.notifier import get_notifier

    return get_notifier()


@pytest.fixture()
def identity_provider(_adapters):
    from identity.provider import get_identity_provider

    return get_identity_provider()
