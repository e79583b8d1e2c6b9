"""
Booking authorization guard
"""
from types import SimpleNamespace

import pytest

from app.exceptions import PermissionDenied
from app.utils.booking_access import (
    Identity,
    authorize,
    identity_for,
    require_party,
    require_tutor,
)

BOOKING = SimpleNamespace(student_id=10, tutor_id=3)


def test_student_of_booking():
    access = authorize(Identity(user_id=10), BOOKING)
    assert access.is_student
    assert not access.is_tutor
    assert access.is_party


def test_tutor_of_booking():
    access = authorize(Identity(user_id=20, role="tutor", tutor_id=3), BOOKING)
    assert access.is_tutor
    assert not access.is_student


def test_user_without_tutor_profile_is_never_tutor():
    access = authorize(Identity(user_id=20, tutor_id=None), SimpleNamespace(student_id=10, tutor_id=None))
    assert not access.is_tutor


def test_stranger_is_denied():
    stranger = Identity(user_id=99, role="tutor", tutor_id=7)
    assert not authorize(stranger, BOOKING).is_party
    with pytest.raises(PermissionDenied):
        require_party(stranger, BOOKING)


def test_student_cannot_act_as_tutor():
    with pytest.raises(PermissionDenied):
        require_tutor(Identity(user_id=10), BOOKING)


def test_identity_resolves_tutor_profile(db, tutor_user, tutor, student):
    assert identity_for(db, tutor_user) == Identity(
        user_id=tutor_user.id, role="tutor", tutor_id=tutor.id
    )
    assert identity_for(db, student).tutor_id is None
