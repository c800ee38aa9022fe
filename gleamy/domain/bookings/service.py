"""Booking service - booking lifecycle: create, update, cancel, environment images"""

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ... import config
from ...database import atomic
from ...models import Booking, BookingStatus, PaymentStatus
from ...shared.identifiers import generate_booking_number
from ..actor import Actor
from ..assignments.repository import AssignmentRepository
from ..errors import Conflict, Forbidden, NotFound
from ..lifecycle import EDITABLE_BOOKING_STATUSES, ensure_booking_transition
from .repository import BookingRepository
from .schemas import BookingCreate, BookingUpdate

# BookingUpdate field -> Booking column
UPDATABLE_FIELDS = {
    "scheduledDate": "scheduled_date",
    "scheduledTime": "scheduled_time",
    "duration": "duration",
    "address": "address",
    "city": "city",
    "postalCode": "postal_code",
    "specialInstructions": "special_instructions",
}


class BookingService:
    """Service layer for the booking lifecycle"""

    def __init__(
        self,
        db: Session,
        number_factory: Optional[Callable[[], str]] = None,
        max_number_attempts: Optional[int] = None,
    ):
        self.db = db
        self.repo = BookingRepository()
        self.assignments = AssignmentRepository()
        self.number_factory = number_factory or (
            lambda: generate_booking_number(config.BOOKING_NUMBER_PREFIX)
        )
        self.max_number_attempts = max_number_attempts or config.BOOKING_NUMBER_MAX_ATTEMPTS

    # Reads
    def get_booking(self, booking_id: int, actor: Actor) -> Booking:
        """Owner, admins and employees assigned to the booking may view it"""
        booking = self.repo.get_booking_detail(self.db, booking_id)
        if not booking:
            raise NotFound("Booking not found")

        if actor.is_admin or self._is_owner(booking, actor):
            return booking
        if any(a.employee and a.employee.user_id == actor.subject_id for a in booking.assignments):
            return booking
        raise Forbidden("You do not have access to this booking")

    def get_my_bookings(self, actor: Actor) -> list[Booking]:
        customer = self._get_customer(actor)
        return self.repo.get_customer_bookings(self.db, customer.id)

    def list_bookings(
        self, status: Optional[BookingStatus], page: int, limit: int
    ) -> tuple[list[Booking], int]:
        page = max(page, 1)
        limit = min(max(limit, 1), config.MAX_PAGE_SIZE)
        return self.repo.list_bookings(self.db, status, offset=(page - 1) * limit, limit=limit)

    # Lifecycle
    def create_booking(self, data: BookingCreate, actor: Actor) -> Booking:
        """Create a PENDING booking priced from the service as it is right now"""
        customer = self._get_customer(actor)

        service = self.repo.get_active_service(self.db, data.serviceId)
        if not service:
            raise NotFound("Service not found")

        # Snapshot before any retry can expire the loaded rows
        fields = {
            "customer_id": customer.id,
            "service_id": service.id,
            "scheduled_date": data.scheduledDate,
            "scheduled_time": data.scheduledTime,
            "duration": data.duration or service.duration,
            "address": data.address if data.address is not None else customer.address,
            "city": data.city if data.city is not None else customer.city,
            "postal_code": data.postalCode if data.postalCode is not None else customer.postal_code,
            "special_instructions": data.specialInstructions,
            "estimated_price": service.base_price,
            "status": BookingStatus.PENDING,
            "payment_status": PaymentStatus.PENDING,
            "environment_images": [],
        }

        for _ in range(self.max_number_attempts):
            booking_number = self.number_factory()
            if self.repo.booking_number_exists(self.db, booking_number):
                continue

            booking = Booking(booking_number=booking_number, **fields)
            try:
                self.repo.add_booking(self.db, booking)
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                # Lost a race for the number; anything else is a real error
                if self.repo.booking_number_exists(self.db, booking_number):
                    continue
                raise
            self.db.refresh(booking)
            return booking

        raise Conflict("Could not allocate a unique booking number, please retry")

    def update_booking(self, booking_id: int, data: BookingUpdate, actor: Actor) -> Booking:
        booking = self._get_managed_booking(booking_id, actor)

        if booking.status not in EDITABLE_BOOKING_STATUSES:
            raise Conflict(f"Booking can no longer be modified (status {booking.status.value})")

        updates = {}
        for field, column in UPDATABLE_FIELDS.items():
            value = getattr(data, field)
            if value is not None:
                updates[column] = value

        if not updates:
            return booking

        with atomic(self.db):
            applied = self.repo.update_fields_if_status(
                self.db, booking.id, EDITABLE_BOOKING_STATUSES, **updates
            )
            if not applied:
                raise Conflict("Booking changed status while being modified")

        self.db.refresh(booking)
        return booking

    def cancel_booking(self, booking_id: int, actor: Actor) -> Booking:
        """Cancel and release any active assignment in one transaction"""
        booking = self._get_managed_booking(booking_id, actor)
        current = booking.status
        ensure_booking_transition(current, BookingStatus.CANCELLED)

        with atomic(self.db):
            if not self.repo.transition_status(
                self.db, booking.id, (current,), BookingStatus.CANCELLED
            ):
                raise Conflict("Booking changed status while being cancelled")

            assignment = self.assignments.get_active_assignment_for_booking(self.db, booking.id)
            if assignment:
                if not self.assignments.void_assignment(
                    self.db, assignment.id, datetime.now(timezone.utc)
                ):
                    raise Conflict("Job assignment changed while being released")
                self.assignments.release_employee(self.db, assignment.employee_id)

        self.db.refresh(booking)
        return booking

    def attach_environment_images(
        self, booking_id: int, references: list[str], actor: Actor
    ) -> list[str]:
        """Append media references in order; repeated calls append again"""
        with atomic(self.db):
            booking = self.repo.get_booking_for_update(self.db, booking_id)
            if not booking:
                raise NotFound("Booking not found")
            if not self._is_owner(booking, actor):
                raise Forbidden("Only the customer who made the booking can add images")

            booking.environment_images = [*(booking.environment_images or []), *references]
            self.repo.add_media(self.db, booking.id, references)

        self.db.refresh(booking)
        return booking.environment_images

    # Helpers
    def _get_customer(self, actor: Actor):
        customer = self.repo.get_customer_by_user_id(self.db, actor.subject_id)
        if not customer:
            raise NotFound("Customer profile not found")
        return customer

    def _get_managed_booking(self, booking_id: int, actor: Actor) -> Booking:
        """Booking the actor may change: its owner or an admin"""
        booking = self.repo.get_booking_by_id(self.db, booking_id)
        if not booking:
            raise NotFound("Booking not found")
        if not (actor.is_admin or self._is_owner(booking, actor)):
            raise Forbidden("You can only manage your own bookings")
        return booking

    @staticmethod
    def _is_owner(booking: Booking, actor: Actor) -> bool:
        return booking.customer is not None and booking.customer.user_id == actor.subject_id
