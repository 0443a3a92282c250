"""Repository for the AddressBook aggregate."""

from identity.address_book.address_book import AddressBook
from identity.domain import identity


@identity.repository(part_of=AddressBook)
class AddressBookRepository:
    """Address books are looked up by their owner.

    Each book carries its own id, so a book re-created after its last address
    was deleted starts a new event stream.
    """

    def find_by_user(self, user_id) -> AddressBook | None:
        """The user's address book, or None when they have none."""
        books = self._dao.query.filter(user_id=str(user_id)).all().items
        return books[0] if books else None
