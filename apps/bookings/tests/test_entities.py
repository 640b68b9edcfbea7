"""Tests for booking type parsing and item references."""

from __future__ import annotations

import pytest

from apps.bookings.domain.entities import BookedItemRef, BookingType, Requester
from shared.domain.exceptions import ValidationError


@pytest.mark.parametrize("raw", ["hotel", "HOTEL", "Hotel", " hOtEl "])
def test_booking_type_parse_is_case_insensitive(raw):
    assert BookingType.parse(raw) is BookingType.HOTEL


@pytest.mark.parametrize("raw", ["", "Train", None, 3])
def test_booking_type_parse_rejects_unknown(raw):
    with pytest.raises(ValidationError):
        BookingType.parse(raw)


def test_hotel_reference_requires_room():
    with pytest.raises(ValidationError):
        BookedItemRef(BookingType.HOTEL, item_id=1, room_id=2)

    ref = BookedItemRef(BookingType.HOTEL, item_id=1, room_id=2, room_number=101)
    assert str(ref) == "Hotel 1 room 2 #101"


def test_requester_access():
    assert Requester(user_id=1).can_access(1)
    assert not Requester(user_id=1).can_access(2)
    assert Requester(user_id=1, is_admin=True).can_access(2)
