"""Booking repository - Database operations for bookings"""

from typing import Optional

from sqlalchemy import func, update
from sqlalchemy.orm import Session, joinedload

from ...models import (
    Booking,
    BookingStatus,
    Customer,
    Employee,
    JobAssignment,
    MediaType,
    Service,
    UploadedMedia,
)


class BookingRepository:
    """Repository for booking database operations"""

    @staticmethod
    def get_booking_by_id(db: Session, booking_id: int) -> Optional[Booking]:
        return db.query(Booking).filter(Booking.id == booking_id).first()

    @staticmethod
    def get_booking_for_update(db: Session, booking_id: int) -> Optional[Booking]:
        """Row-locked read for read-modify-write of list columns"""
        return db.query(Booking).filter(Booking.id == booking_id).with_for_update().first()

    @staticmethod
    def get_booking_detail(db: Session, booking_id: int) -> Optional[Booking]:
        """Get a booking with service, customer, assignments, media and review loaded"""
        return (
            db.query(Booking)
            .options(
                joinedload(Booking.service),
                joinedload(Booking.customer).joinedload(Customer.user),
                joinedload(Booking.assignments)
                .joinedload(JobAssignment.employee)
                .joinedload(Employee.user),
                joinedload(Booking.uploaded_media),
                joinedload(Booking.review),
            )
            .filter(Booking.id == booking_id)
            .first()
        )

    @staticmethod
    def booking_number_exists(db: Session, booking_number: str) -> bool:
        return (
            db.query(Booking.id).filter(Booking.booking_number == booking_number).first()
            is not None
        )

    @staticmethod
    def get_customer_by_user_id(db: Session, user_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.user_id == user_id).first()

    @staticmethod
    def get_active_service(db: Session, service_id: int) -> Optional[Service]:
        return (
            db.query(Service)
            .filter(Service.id == service_id, Service.is_active.is_(True))
            .first()
        )

    @staticmethod
    def get_customer_bookings(db: Session, customer_id: int) -> list[Booking]:
        """Get all bookings for a customer, newest first"""
        return (
            db.query(Booking)
            .options(
                joinedload(Booking.service),
                joinedload(Booking.assignments)
                .joinedload(JobAssignment.employee)
                .joinedload(Employee.user),
            )
            .filter(Booking.customer_id == customer_id)
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .all()
        )

    @staticmethod
    def list_bookings(
        db: Session,
        status: Optional[BookingStatus] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Booking], int]:
        """Paginated listing for administrators. Returns (bookings, total)"""
        query = db.query(Booking)
        if status:
            query = query.filter(Booking.status == status)

        total = query.with_entities(func.count(Booking.id)).scalar()

        bookings = (
            query.options(
                joinedload(Booking.service),
                joinedload(Booking.customer).joinedload(Customer.user),
                joinedload(Booking.assignments)
                .joinedload(JobAssignment.employee)
                .joinedload(Employee.user),
            )
            .order_by(Booking.created_at.desc(), Booking.id.desc())
            .offset(offset)
            .limit(limit)
            .all()
        )
        return bookings, total

    @staticmethod
    def add_booking(db: Session, booking: Booking) -> Booking:
        db.add(booking)
        db.flush()
        return booking

    @staticmethod
    def transition_status(
        db: Session,
        booking_id: int,
        expected: tuple[BookingStatus, ...],
        target: BookingStatus,
    ) -> bool:
        """
        Conditional status write. Returns False when the booking is no longer
        in one of the expected statuses (another request got there first).
        """
        result = db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status.in_(expected))
            .values(status=target)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def update_fields_if_status(
        db: Session,
        booking_id: int,
        allowed: tuple[BookingStatus, ...],
        **updates,
    ) -> bool:
        """Apply field updates only while the booking is in an allowed status"""
        result = db.execute(
            update(Booking)
            .where(Booking.id == booking_id, Booking.status.in_(allowed))
            .values(**updates)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def add_media(db: Session, booking_id: int, references: list[str]) -> list[UploadedMedia]:
        records = [
            UploadedMedia(booking_id=booking_id, reference=reference, media_type=MediaType.IMAGE)
            for reference in references
        ]
        db.add_all(records)
        return records
