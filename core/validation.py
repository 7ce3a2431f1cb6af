from __future__ import annotations

from typing import Optional

from .entities import TripRequest
from .location import can_locate

RANGE_MODE = "range"
SINGLE_MODE = "single"
MODES = (RANGE_MODE, SINGLE_MODE)


def validate(request: TripRequest, mode: str = RANGE_MODE) -> Optional[str]:
    """Return why ``request`` cannot be forecast, or ``None`` if it can.

    Missing fields are an expected outcome, so nothing is raised.
    """
    if not request.check_in_date:
        return "missing check-in date"
    checkin = request.checkin
    if checkin is None:
        return f"invalid check-in date {request.check_in_date!r}"

    if request.check_out_date:
        checkout = request.checkout
        if checkout is None:
            return f"invalid check-out date {request.check_out_date!r}"
        if checkout <= checkin:
            return "check-out date must be after check-in date"
    elif mode == RANGE_MODE:
        return "missing check-out date"

    if not can_locate(request):
        return "missing coordinates and address"
    return None


__all__ = ["MODES", "RANGE_MODE", "SINGLE_MODE", "validate"]
