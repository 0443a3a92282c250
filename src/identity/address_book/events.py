"""Domain events for the AddressBook aggregate."""

from protean.fields import Boolean, Identifier, Integer, String

from identity.domain import identity


@identity.event(part_of="AddressBook")
class AddressAdded:
    """A new address was appended to a user's address book and became the default."""

    __version__ = 1

    user_id: Identifier(required=True)
    index: Integer(required=True)
    name: String(required=True)
    address_line1: String(required=True)
    address_line2: String()
    city: String(required=True)
    state: String(required=True)
    pincode: String(required=True)
    country: String(required=True)
    phone: String(required=True)


@identity.event(part_of="AddressBook")
class AddressUpdated:
    """An existing address in a user's address book was modified."""

    __version__ = 1

    user_id: Identifier(required=True)
    index: Integer(required=True)
    name: String()
    address_line1: String()
    address_line2: String()
    city: String()
    state: String()
    pincode: String()
    country: String()
    phone: String()
    made_default: Boolean(default=False)


@identity.event(part_of="AddressBook")
class AddressRemoved:
    """An address was deleted from a user's address book."""

    __version__ = 1

    user_id: Identifier(required=True)
    index: Integer(required=True)
    remaining: Integer(required=True)
    default_address: Integer(required=True)


@identity.event(part_of="AddressBook")
class DefaultAddressChanged:
    """A different address was designated as the user's default."""

    __version__ = 1

    user_id: Identifier(required=True)
    index: Integer(required=True)
    previous_index: Integer()
