"""
Booking price policy.

Trial sessions always carry at least a nominal charge; regular sessions are
priced by course, then by the tutor's hourly fee, then by the platform default.
"""
import math
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

TRIAL_FEE_FLOOR = float(os.getenv("TRIAL_FEE_FLOOR", "49"))
DEFAULT_SESSION_FEE = float(os.getenv("DEFAULT_SESSION_FEE", "500"))


def compute_amount(is_trial: bool, tutor, course: Optional[object] = None) -> float:
    """
    Computes the charge for a booking.

    Args:
        is_trial: True for a trial session
        tutor: Tutor (or any object exposing fee_per_hour / trial_fee)
        course: Course referenced by the booking, if any

    Returns:
        float: Non-negative amount in the platform currency
    """
    if is_trial:
        trial_fee = getattr(tutor, "trial_fee", None)
        if trial_fee is not None and trial_fee >= TRIAL_FEE_FLOOR:
            return float(trial_fee)
        return TRIAL_FEE_FLOOR

    course_price = getattr(course, "price", None) if course is not None else None
    if course_price is not None:
        return max(float(course_price), 0.0)

    fee_per_hour = getattr(tutor, "fee_per_hour", None)
    if fee_per_hour is not None:
        return max(float(fee_per_hour), 0.0)

    return DEFAULT_SESSION_FEE


def tutor_payout(amount: float, commission: float) -> int:
    """Share released to the tutor once the platform commission is taken."""
    return math.floor(amount * (1 - commission))
