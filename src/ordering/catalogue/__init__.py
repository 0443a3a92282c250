"""Catalogue adapter registry: pluggable live product lookups.

Uses the in-memory catalogue by default. Select another adapter with the
CATALOGUE_ADAPTER environment variable.
"""

import os

from ordering.catalogue.port import CataloguePort

_catalogue_instance: CataloguePort | None = None


def get_catalogue() -> CataloguePort:
    """Return the configured catalogue adapter (singleton)."""
    global _catalogue_instance
    if _catalogue_instance is None:
        adapter = os.environ.get("CATALOGUE_ADAPTER", "fake")
        if adapter == "fake":
            from ordering.catalogue.fake_adapter import InMemoryCatalogue

            _catalogue_instance = InMemoryCatalogue()
        else:
            raise ValueError(f"Unknown catalogue adapter: {adapter}")
    return _catalogue_instance


def set_catalogue(catalogue: CataloguePort) -> None:
    """Override the active catalogue (useful for tests)."""
    global _catalogue_instance
    _catalogue_instance = catalogue


def reset_catalogue() -> None:
    """Reset the catalogue singleton (useful for testing)."""
    global _catalogue_instance
    _catalogue_instance = None
