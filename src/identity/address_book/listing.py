"""Read side of the address book."""

from protean.utils.globals import current_domain

from identity.address_book.address_book import AddressBook


def list_addresses(user_id) -> dict:
    """Return the user's addresses, default first.

    A user without an address book gets an empty list and index 0.
    """
    book = current_domain.repository_for(AddressBook).find_by_user(user_id)
    if book is None:
        return {"addresses": [], "default_address_index": 0}

    return {
        "addresses": book.listing(),
        "default_address_index": book.default_address,
    }


def default_address_for(user_id) -> dict | None:
    """The user's default address as a dict, or None when they have none."""
    book = current_domain.repository_for(AddressBook).find_by_user(user_id)
    if book is None:
        return None

    entry = book.default_entry()
    return entry.to_payload() if entry else None
