"""
State machines for bookings and job assignments

Booking:     PENDING → CONFIRMED → IN_PROGRESS → COMPLETED
             PENDING / CONFIRMED → CANCELLED
Assignment:  ASSIGNED → STARTED → COMPLETED

Every status write goes through ensure_booking_transition or
ensure_assignment_transition.
"""

from ..models import AssignmentStatus, BookingStatus
from .errors import InvalidTransition

BOOKING_TRANSITIONS = {
    BookingStatus.PENDING: (BookingStatus.CONFIRMED, BookingStatus.CANCELLED),
    BookingStatus.CONFIRMED: (BookingStatus.IN_PROGRESS, BookingStatus.CANCELLED),
    BookingStatus.IN_PROGRESS: (BookingStatus.COMPLETED,),
    BookingStatus.COMPLETED: (),  # Terminal state
    BookingStatus.CANCELLED: (),  # Terminal state
}

ASSIGNMENT_TRANSITIONS = {
    AssignmentStatus.ASSIGNED: (AssignmentStatus.STARTED,),
    AssignmentStatus.STARTED: (AssignmentStatus.COMPLETED,),
    AssignmentStatus.COMPLETED: (),
}

# Schedule, location and instructions may only change before work starts
EDITABLE_BOOKING_STATUSES = (BookingStatus.PENDING, BookingStatus.CONFIRMED)

# What the owning booking moves to when its assignment reaches a state
BOOKING_STATUS_FOR_ASSIGNMENT = {
    AssignmentStatus.ASSIGNED: BookingStatus.CONFIRMED,
    AssignmentStatus.STARTED: BookingStatus.IN_PROGRESS,
    AssignmentStatus.COMPLETED: BookingStatus.COMPLETED,
}


def can_transition_booking(current: BookingStatus, target: BookingStatus) -> bool:
    return target in BOOKING_TRANSITIONS.get(current, ())


def ensure_booking_transition(current: BookingStatus, target: BookingStatus) -> None:
    if not can_transition_booking(current, target):
        raise InvalidTransition("Booking", current, target)


def ensure_assignment_transition(current: AssignmentStatus, target: AssignmentStatus) -> None:
    if target not in ASSIGNMENT_TRANSITIONS.get(current, ()):
        raise InvalidTransition("Job assignment", current, target)
