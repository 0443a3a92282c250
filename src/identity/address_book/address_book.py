"""AddressBook aggregate with the Address entity.

A user keeps at most three shipping addresses. Whenever the book holds any
address, exactly one of them is the default and it sits at ``default_address``.
Addresses are addressed by their zero-based position in the book; positions
are renumbered when an address is deleted.

There is at most one book per user, found through
``AddressBookRepository.find_by_user``. It is created lazily on the first
add and removed entirely when its last address is deleted.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String

from identity.address_book.events import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    DefaultAddressChanged,
)
from identity.domain import identity
from shared.errors import LimitExceeded

MAX_ADDRESSES = 3

DEFAULT_COUNTRY = "India"

ADDRESS_FIELDS = (
    "name",
    "address_line1",
    "address_line2",
    "city",
    "state",
    "pincode",
    "country",
    "phone",
)


@identity.entity(part_of="AddressBook")
class Address:
    """A shipping destination in a user's address book."""

    name: String(required=True, max_length=100)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255, default="")
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    pincode: String(required=True, max_length=20)
    country: String(required=True, max_length=100, default=DEFAULT_COUNTRY)
    phone: String(required=True, max_length=20)
    is_default: Boolean(default=False)
    position: Integer(min_value=0, default=0)

    def to_payload(self):
        payload = {field: getattr(self, field) for field in ADDRESS_FIELDS}
        payload["address_line2"] = payload["address_line2"] or ""
        payload["is_default"] = bool(self.is_default)
        return payload


@identity.aggregate
class AddressBook:
    """A user's bounded list of shipping addresses with a single default."""

    user_id: Identifier(required=True, unique=True)
    addresses: HasMany(Address)
    default_address: Integer(min_value=0, default=0)
    created_at: DateTime()
    updated_at: DateTime()

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @invariant.post
    def default_address_is_the_only_default(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})
        if defaults[0].position != self.default_address:
            raise ValidationError({"default_address": ["Default index does not point at the default address"]})

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=str(user_id), default_address=0, created_at=now, updated_at=now)

    def entries(self):
        """Addresses in book order."""
        return sorted(self.addresses, key=lambda a: a.position)

    def listing(self):
        """Addresses as dicts, the default first, each tagged with its index."""
        entries = self.entries()
        ordered = [a for a in entries if a.is_default] + [a for a in entries if not a.is_default]
        return [{"index": a.position, **a.to_payload()} for a in ordered]

    def default_entry(self):
        return next((a for a in self.addresses if a.is_default), None)

    def _at(self, index):
        entries = self.entries()
        if index is None or index < 0 or index >= len(entries):
            raise ObjectNotFoundError({"address": [f"Address {index} not found"]})
        return entries[index]

    def _point_default_at(self, index):
        for addr in self.addresses:
            addr.is_default = addr.position == index
        self.default_address = index

    def add_address(
        self,
        name,
        address_line1,
        city,
        state,
        pincode,
        phone,
        address_line2="",
        country=DEFAULT_COUNTRY,
    ):
        if len(self.addresses) >= MAX_ADDRESSES:
            raise LimitExceeded(
                {
                    "addresses": [
                        f"Maximum of {MAX_ADDRESSES} addresses allowed. "
                        "Delete an address before adding a new one."
                    ]
                }
            )

        index = len(self.addresses)
        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False

            address = Address(
                name=name,
                address_line1=address_line1,
                address_line2=address_line2 or "",
                city=city,
                state=state,
                pincode=pincode,
                country=country or DEFAULT_COUNTRY,
                phone=phone,
                is_default=True,
                position=index,
            )
            self.add_addresses(address)
            self.default_address = index
            self.updated_at = datetime.now(UTC)

        self.raise_(
            AddressAdded(
                user_id=self.user_id,
                index=index,
                name=name,
                address_line1=address_line1,
                address_line2=address.address_line2,
                city=city,
                state=state,
                pincode=pincode,
                country=address.country,
                phone=phone,
            )
        )
        return address

    def update_address(self, index, set_as_default=True, **changes):
        """Merge ``changes`` into the address at ``index``.

        The address becomes the default unless ``set_as_default`` is False.
        """
        unknown = set(changes) - set(ADDRESS_FIELDS)
        if unknown:
            raise ValidationError({field: ["Unknown address field"] for field in sorted(unknown)})

        address = self._at(index)

        with atomic_change(self):
            for field, value in changes.items():
                setattr(address, field, value)
            if set_as_default:
                self._point_default_at(index)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            AddressUpdated(
                user_id=self.user_id,
                index=index,
                made_default=bool(set_as_default),
                **changes,
            )
        )
        return address

    def remove_address(self, index):
        """Delete the address at ``index`` and re-elect the default if needed.

        Deleting the default makes the new last address the default. Deleting
        an address before the default shifts the default index down by one.
        """
        address = self._at(index)

        with atomic_change(self):
            self.remove_addresses(address)
            for addr in self.addresses:
                if addr.position > index:
                    addr.position -= 1

            if not self.addresses:
                self.default_address = 0
            elif index == self.default_address:
                self._point_default_at(len(self.addresses) - 1)
            elif index < self.default_address:
                self.default_address -= 1
            self.updated_at = datetime.now(UTC)

        self.raise_(
            AddressRemoved(
                user_id=self.user_id,
                index=index,
                remaining=len(self.addresses),
                default_address=self.default_address,
            )
        )

    def set_default_address(self, index):
        self._at(index)
        previous_index = self.default_address

        with atomic_change(self):
            self._point_default_at(index)
            self.updated_at = datetime.now(UTC)

        self.raise_(
            DefaultAddressChanged(
                user_id=self.user_id,
                index=index,
                previous_index=previous_index,
            )
        )
