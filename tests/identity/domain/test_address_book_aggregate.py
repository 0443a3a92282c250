"""Tests for the AddressBook aggregate: the three-address limit and the single default."""

import pytest
from identity.address_book.address_book import MAX_ADDRESSES, AddressBook
from identity.address_book.events import (
    AddressAdded,
    AddressRemoved,
    AddressUpdated,
    DefaultAddressChanged,
)
from protean.exceptions import ObjectNotFoundError, ValidationError
from shared.errors import LimitExceeded, StateError


def _book_with(address_data, *names):
    book = AddressBook.create(user_id="user-001")
    for name in names:
        book.add_address(**{**address_data, "name": name})
    book._events.clear()
    return book


def _names(book):
    return [a.name for a in book.entries()]


def _default_name(book):
    return book.entries()[book.default_address].name


class TestAddressBookCreation:
    def test_create_starts_empty(self):
        book = AddressBook.create(user_id="user-001")
        assert len(book.addresses) == 0
        assert book.default_address == 0
        assert book.user_id == "user-001"

    def test_create_sets_timestamps(self):
        book = AddressBook.create(user_id="user-001")
        assert book.created_at is not None
        assert book.updated_at is not None


class TestAddAddress:
    def test_first_address_is_default(self, address_data):
        book = _book_with(address_data, "Home")
        assert book.default_address == 0
        assert book.entries()[0].is_default is True

    def test_new_address_becomes_default(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        assert book.default_address == 1
        assert [a.is_default for a in book.entries()] == [False, True]

    def test_country_defaults_to_india(self, address_data):
        book = _book_with(address_data, "Home")
        assert book.entries()[0].country == "India"

    def test_address_line2_defaults_to_empty(self, address_data):
        book = _book_with(address_data, "Home")
        assert book.entries()[0].address_line2 == ""

    def test_fourth_address_is_rejected(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        with pytest.raises(LimitExceeded) as exc:
            book.add_address(**{**address_data, "name": "Office"})
        assert "Maximum of 3 addresses" in exc.value.messages["addresses"][0]
        assert len(book.addresses) == MAX_ADDRESSES

    def test_limit_is_a_state_error(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        with pytest.raises(StateError):
            book.add_address(**address_data)

    def test_missing_required_field_is_rejected(self, address_data):
        book = AddressBook.create(user_id="user-001")
        address_data.pop("pincode")
        with pytest.raises((TypeError, ValidationError)):
            book.add_address(**address_data)

    def test_raises_address_added_event(self, address_data):
        book = AddressBook.create(user_id="user-001")
        book.add_address(**address_data)
        assert len(book._events) == 1
        event = book._events[0]
        assert isinstance(event, AddressAdded)
        assert event.index == 0
        assert event.country == "India"


class TestUpdateAddress:
    def test_update_merges_fields(self, address_data):
        book = _book_with(address_data, "Home")
        book.update_address(0, city="Mysuru")
        entry = book.entries()[0]
        assert entry.city == "Mysuru"
        assert entry.address_line1 == address_data["address_line1"]

    def test_update_makes_address_default(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        book.update_address(0, pincode="560002")
        assert book.default_address == 0
        assert _default_name(book) == "Home"

    def test_update_can_keep_the_current_default(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        book.update_address(0, pincode="560002", set_as_default=False)
        assert book.default_address == 1
        assert _default_name(book) == "Work"

    def test_update_out_of_range(self, address_data):
        book = _book_with(address_data, "Home")
        with pytest.raises(ObjectNotFoundError):
            book.update_address(3, city="Mysuru")

    def test_update_negative_index(self, address_data):
        book = _book_with(address_data, "Home")
        with pytest.raises(ObjectNotFoundError):
            book.update_address(-1, city="Mysuru")

    def test_update_unknown_field(self, address_data):
        book = _book_with(address_data, "Home")
        with pytest.raises(ValidationError):
            book.update_address(0, landmark="Near the park")

    def test_raises_address_updated_event(self, address_data):
        book = _book_with(address_data, "Home")
        book.update_address(0, city="Mysuru")
        event = book._events[0]
        assert isinstance(event, AddressUpdated)
        assert event.city == "Mysuru"
        assert event.made_default is True


class TestRemoveAddress:
    def test_removing_default_elects_new_last(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        book.set_default_address(0)
        book.remove_address(0)
        assert _names(book) == ["Work", "Parents"]
        assert book.default_address == 1
        assert _default_name(book) == "Parents"

    def test_removing_last_default_elects_new_last(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        book.remove_address(2)
        assert _names(book) == ["Home", "Work"]
        assert book.default_address == 1
        assert _default_name(book) == "Work"

    def test_removing_before_default_shifts_index(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        book.remove_address(0)
        assert book.default_address == 1
        assert _default_name(book) == "Parents"

    def test_removing_after_default_keeps_index(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        book.set_default_address(0)
        book.remove_address(2)
        assert book.default_address == 0
        assert _default_name(book) == "Home"

    def test_removing_sole_address_empties_book(self, address_data):
        book = _book_with(address_data, "Home")
        book.remove_address(0)
        assert len(book.addresses) == 0
        assert book.default_address == 0

    def test_exactly_one_default_after_removal(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        book.remove_address(1)
        assert sum(1 for a in book.addresses if a.is_default) == 1

    def test_remove_out_of_range(self, address_data):
        book = _book_with(address_data, "Home")
        with pytest.raises(ObjectNotFoundError):
            book.remove_address(1)

    def test_raises_address_removed_event(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        book.remove_address(1)
        event = book._events[0]
        assert isinstance(event, AddressRemoved)
        assert event.remaining == 1
        assert event.default_address == 0


class TestSetDefaultAddress:
    def test_set_default(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        book.set_default_address(0)
        assert book.default_address == 0
        assert [a.is_default for a in book.entries()] == [True, False]

    def test_set_default_out_of_range(self, address_data):
        book = _book_with(address_data, "Home")
        with pytest.raises(ObjectNotFoundError):
            book.set_default_address(2)

    def test_raises_default_address_changed_event(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        book.set_default_address(0)
        event = book._events[0]
        assert isinstance(event, DefaultAddressChanged)
        assert event.index == 0
        assert event.previous_index == 1


class TestListing:
    def test_listing_puts_default_first(self, address_data):
        book = _book_with(address_data, "Home", "Work", "Parents")
        book.set_default_address(1)
        listing = book.listing()
        assert [entry["name"] for entry in listing] == ["Work", "Home", "Parents"]
        assert [entry["index"] for entry in listing] == [1, 0, 2]
        assert listing[0]["is_default"] is True

    def test_default_entry(self, address_data):
        book = _book_with(address_data, "Home", "Work")
        assert book.default_entry().name == "Work"
