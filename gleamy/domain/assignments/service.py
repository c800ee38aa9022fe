"""Job assignment service - assigning employees and progressing jobs"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.orm import Session

from ... import config
from ...database import atomic
from ...models import (
    AssignmentStatus,
    BookingStatus,
    Employee,
    JobAssignment,
    UserStatus,
)
from ..actor import Actor
from ..bookings.repository import BookingRepository
from ..errors import Conflict, Forbidden, InvalidTransition, NotFound, Unavailable
from ..lifecycle import (
    BOOKING_STATUS_FOR_ASSIGNMENT,
    ensure_assignment_transition,
    ensure_booking_transition,
)
from .repository import AssignmentRepository
from .schemas import AssignEmployeeRequest, ImageKind


class AssignmentService:
    """Service layer for the job assignment workflow"""

    def __init__(self, db: Session, max_active_jobs: Optional[int] = None):
        self.db = db
        self.repo = AssignmentRepository()
        self.bookings = BookingRepository()
        self.max_active_jobs = max_active_jobs or config.EMPLOYEE_MAX_ACTIVE_JOBS

    def assign_employee(self, data: AssignEmployeeRequest) -> JobAssignment:
        """
        Assign an available employee to a PENDING booking.

        Creates the assignment, confirms the booking and claims the
        employee's job slot in one transaction.
        """
        booking = self.bookings.get_booking_by_id(self.db, data.bookingId)
        if not booking:
            raise NotFound("Booking not found")

        employee = self.repo.get_employee_by_id(self.db, data.employeeId)
        if not employee:
            raise NotFound("Employee not found")

        if booking.status != BookingStatus.PENDING:
            raise Conflict(f"Only pending bookings can be assigned (status {booking.status.value})")
        if self.repo.get_active_assignment_for_booking(self.db, booking.id):
            raise Conflict("Booking already has an active assignment")
        if not self._can_take_work(employee):
            raise Unavailable("Employee is not available for new jobs")

        with atomic(self.db):
            if not self.bookings.transition_status(
                self.db, booking.id, (BookingStatus.PENDING,), BookingStatus.CONFIRMED
            ):
                raise Conflict("Booking was assigned or changed by another request")
            if not self.repo.claim_employee(self.db, employee.id, self.max_active_jobs):
                raise Unavailable("Employee is not available for new jobs")

            assignment = self.repo.add_assignment(
                self.db,
                JobAssignment(
                    booking_id=booking.id,
                    employee_id=employee.id,
                    status=AssignmentStatus.ASSIGNED,
                    assigned_at=datetime.now(timezone.utc),
                    notes=data.notes,
                    before_images=[],
                    after_images=[],
                ),
            )

        self.db.refresh(assignment)
        return assignment

    def advance_status(
        self,
        assignment_id: int,
        target: AssignmentStatus,
        actor: Actor,
        notes: Optional[str] = None,
    ) -> JobAssignment:
        """
        ASSIGNED → STARTED moves the booking to IN_PROGRESS;
        STARTED → COMPLETED completes the booking and frees the employee.
        Nothing is written when the transition is rejected.
        """
        assignment = self._get_own_assignment(assignment_id, actor)

        if assignment.voided_at is not None:
            raise InvalidTransition("Job assignment", "VOIDED", target)

        current = assignment.status
        ensure_assignment_transition(current, target)

        booking_from = BOOKING_STATUS_FOR_ASSIGNMENT[current]
        booking_to = BOOKING_STATUS_FOR_ASSIGNMENT[target]
        ensure_booking_transition(booking_from, booking_to)

        now = datetime.now(timezone.utc)
        values = {"status": target}
        if target == AssignmentStatus.STARTED:
            values["started_at"] = now
        elif target == AssignmentStatus.COMPLETED:
            values["completed_at"] = now
        if notes is not None:
            values["notes"] = notes

        with atomic(self.db):
            if not self.repo.transition_assignment(self.db, assignment.id, current, **values):
                raise Conflict("Job assignment was changed by another request")
            if not self.bookings.transition_status(
                self.db, assignment.booking_id, (booking_from,), booking_to
            ):
                raise Conflict("Booking is no longer in the expected status")
            if target == AssignmentStatus.COMPLETED:
                self.repo.release_employee(self.db, assignment.employee_id)

        self.db.refresh(assignment)
        return assignment

    def attach_job_images(
        self, assignment_id: int, kind: ImageKind, references: list[str], actor: Actor
    ) -> list[str]:
        """Replace the before or after image list"""
        assignment = self._get_own_assignment(assignment_id, actor)
        column = f"{kind.value}_images"

        with atomic(self.db):
            self.repo.update_images(self.db, assignment.id, **{column: list(references)})

        self.db.refresh(assignment)
        return getattr(assignment, column)

    # Reads
    def get_my_jobs(self, actor: Actor) -> list[JobAssignment]:
        employee = self._get_employee(actor)
        return self.repo.get_employee_assignments(self.db, employee.id)

    def get_job(self, assignment_id: int, actor: Actor) -> JobAssignment:
        assignment = self.repo.get_assignment_detail(self.db, assignment_id)
        if not assignment:
            raise NotFound("Job assignment not found")
        if actor.is_admin or assignment.employee.user_id == actor.subject_id:
            return assignment
        raise Forbidden("This job is assigned to another employee")

    # Helpers
    def _get_employee(self, actor: Actor) -> Employee:
        employee = self.repo.get_employee_by_user_id(self.db, actor.subject_id)
        if not employee:
            raise NotFound("Employee profile not found")
        return employee

    def _get_own_assignment(self, assignment_id: int, actor: Actor) -> JobAssignment:
        assignment = self.repo.get_assignment_by_id(self.db, assignment_id)
        if not assignment:
            raise NotFound("Job assignment not found")

        employee = self.repo.get_employee_by_user_id(self.db, actor.subject_id)
        if not employee or employee.id != assignment.employee_id:
            raise Forbidden("Only the assigned employee can update this job")
        return assignment

    def _can_take_work(self, employee: Employee) -> bool:
        return (
            employee.is_available
            and employee.active_job_count < self.max_active_jobs
            and employee.user is not None
            and employee.user.status == UserStatus.ACTIVE
        )
