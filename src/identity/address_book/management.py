"""Address book management: commands and handler.

The book is created on the first AddAddress and deleted when its last
address is removed.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Boolean, Identifier, Integer, String
from protean.utils.globals import current_domain

from identity.address_book.address_book import ADDRESS_FIELDS, DEFAULT_COUNTRY, AddressBook
from identity.domain import identity, logger


@identity.command(part_of="AddressBook")
class AddAddress:
    """Append a new address to a user's address book as the default."""

    user_id: Identifier(required=True)
    name: String(required=True, max_length=100)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    pincode: String(required=True, max_length=20)
    country: String(max_length=100, default=DEFAULT_COUNTRY)
    phone: String(required=True, max_length=20)


@identity.command(part_of="AddressBook")
class UpdateAddress:
    """Merge new values into the address at a given index."""

    user_id: Identifier(required=True)
    index: Integer(required=True)
    name: String(max_length=100)
    address_line1: String(max_length=255)
    address_line2: String(max_length=255)
    city: String(max_length=100)
    state: String(max_length=100)
    pincode: String(max_length=20)
    country: String(max_length=100)
    phone: String(max_length=20)
    set_as_default: Boolean(default=True)


@identity.command(part_of="AddressBook")
class RemoveAddress:
    """Delete the address at a given index."""

    user_id: Identifier(required=True)
    index: Integer(required=True)


@identity.command(part_of="AddressBook")
class SetDefaultAddress:
    """Designate the address at a given index as the user's default."""

    user_id: Identifier(required=True)
    index: Integer(required=True)


def _book_for(user_id):
    book = current_domain.repository_for(AddressBook).find_by_user(user_id)
    if book is None:
        raise ObjectNotFoundError({"address_book": ["No addresses found for this user"]})
    return book


@identity.command_handler(part_of=AddressBook)
class ManageAddressBookHandler:
    @handle(AddAddress)
    def add_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = repo.find_by_user(command.user_id)
        if book is None:
            book = AddressBook.create(user_id=command.user_id)

        book.add_address(
            name=command.name,
            address_line1=command.address_line1,
            address_line2=command.address_line2 or "",
            city=command.city,
            state=command.state,
            pincode=command.pincode,
            country=command.country or DEFAULT_COUNTRY,
            phone=command.phone,
        )
        repo.add(book)
        return book.default_address

    @handle(UpdateAddress)
    def update_address(self, command):
        book = _book_for(command.user_id)

        changes = {}
        for field in ADDRESS_FIELDS:
            value = getattr(command, field, None)
            if value is not None:
                changes[field] = value

        set_as_default = command.set_as_default if command.set_as_default is not None else True
        book.update_address(command.index, set_as_default=set_as_default, **changes)
        current_domain.repository_for(AddressBook).add(book)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(AddressBook)
        book = _book_for(command.user_id)
        book.remove_address(command.index)
        repo.add(book)

        if not book.addresses:
            repo._dao.delete(book)
            logger.info("Address book discarded", user_id=str(command.user_id))

    @handle(SetDefaultAddress)
    def set_default_address(self, command):
        book = _book_for(command.user_id)
        book.set_default_address(command.index)
        current_domain.repository_for(AddressBook).add(book)
