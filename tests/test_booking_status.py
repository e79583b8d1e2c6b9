"""
Booking status machine
"""
import pytest

from app.enums.booking_status import BookingStatus
from app.exceptions import InvalidStatus, InvalidTransition
from app.utils.booking_status import (
    can_transition,
    is_terminal,
    parse_target,
    validate_transition,
)


@pytest.mark.parametrize("value", ["accepted", "rejected", "completed", "cancelled"])
def test_tutor_targets_are_accepted(value):
    assert parse_target(value) == BookingStatus(value)


@pytest.mark.parametrize("value", ["pending", "confirmed", "done", "", None])
def test_other_targets_are_invalid(value):
    with pytest.raises(InvalidStatus):
        parse_target(value)


def test_invalid_transition_is_an_invalid_status():
    assert issubclass(InvalidTransition, InvalidStatus)


@pytest.mark.parametrize(
    "current,target",
    [
        (BookingStatus.PENDING, BookingStatus.ACCEPTED),
        (BookingStatus.PENDING, BookingStatus.REJECTED),
        (BookingStatus.PENDING, BookingStatus.CANCELLED),
        (BookingStatus.ACCEPTED, BookingStatus.COMPLETED),
        (BookingStatus.ACCEPTED, BookingStatus.CANCELLED),
        (BookingStatus.CONFIRMED, BookingStatus.COMPLETED),
        (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    ],
)
def test_ordered_transitions_allowed(current, target):
    assert can_transition(current, target)
    validate_transition(current, target)


@pytest.mark.parametrize(
    "current,target",
    [
        (BookingStatus.PENDING, BookingStatus.COMPLETED),
        (BookingStatus.ACCEPTED, BookingStatus.REJECTED),
        (BookingStatus.REJECTED, BookingStatus.ACCEPTED),
        (BookingStatus.COMPLETED, BookingStatus.CANCELLED),
        (BookingStatus.CANCELLED, BookingStatus.ACCEPTED),
    ],
)
def test_out_of_order_transitions_rejected(current, target):
    with pytest.raises(InvalidTransition):
        validate_transition(current, target)


def test_unordered_mode_only_checks_allow_list():
    validate_transition(BookingStatus.PENDING, BookingStatus.COMPLETED, enforce_order=False)
    validate_transition(BookingStatus.COMPLETED, BookingStatus.ACCEPTED, enforce_order=False)
    with pytest.raises(InvalidStatus):
        validate_transition(BookingStatus.PENDING, BookingStatus.CONFIRMED, enforce_order=False)


def test_terminal_states():
    assert is_terminal(BookingStatus.REJECTED)
    assert is_terminal(BookingStatus.COMPLETED)
    assert is_terminal(BookingStatus.CANCELLED)
    assert not is_terminal(BookingStatus.PENDING)
    assert not is_terminal(BookingStatus.CONFIRMED)
