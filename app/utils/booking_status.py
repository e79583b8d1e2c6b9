from typing import Dict, FrozenSet, Optional

from app.enums.booking_status import BookingStatus
from app.exceptions import InvalidStatus, InvalidTransition

# Targets a tutor may request. confirmed is only reached through payment.
TUTOR_TARGETS: FrozenSet[BookingStatus] = frozenset(
    {
        BookingStatus.ACCEPTED,
        BookingStatus.REJECTED,
        BookingStatus.COMPLETED,
        BookingStatus.CANCELLED,
    }
)

ORDERED_TRANSITIONS: Dict[BookingStatus, FrozenSet[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {BookingStatus.ACCEPTED, BookingStatus.REJECTED, BookingStatus.CANCELLED}
    ),
    BookingStatus.ACCEPTED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    ),
    BookingStatus.CONFIRMED: frozenset(
        {BookingStatus.COMPLETED, BookingStatus.CANCELLED}
    ),
    BookingStatus.REJECTED: frozenset(),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
}

# Statuses from which a successful payment moves the booking to confirmed
PAYABLE_STATUSES: FrozenSet[BookingStatus] = frozenset(
    {BookingStatus.PENDING, BookingStatus.ACCEPTED}
)


def parse_target(value: Optional[str]) -> BookingStatus:
    """Checks the requested status against the targets a tutor may set."""
    try:
        target = BookingStatus(value)
    except ValueError:
        raise InvalidStatus("Invalid status")
    if target not in TUTOR_TARGETS:
        raise InvalidStatus("Invalid status")
    return target


def is_terminal(status: BookingStatus) -> bool:
    return not ORDERED_TRANSITIONS[BookingStatus(status)]


def can_transition(current: BookingStatus, target: BookingStatus) -> bool:
    return BookingStatus(target) in ORDERED_TRANSITIONS[BookingStatus(current)]


def validate_transition(
    current: BookingStatus, target: BookingStatus, enforce_order: bool = True
) -> None:
    if target not in TUTOR_TARGETS:
        raise InvalidStatus("Invalid status")
    if enforce_order and not can_transition(current, target):
        raise InvalidTransition(
            f"Cannot move a {BookingStatus(current).value} booking to {BookingStatus(target).value}"
        )
