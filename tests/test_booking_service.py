"""Tests for the booking lifecycle service."""

from datetime import date

import pytest

from conftest import actor_for, make_admin, make_customer, make_employee, make_service
from gleamy.domain.assignments.schemas import AssignEmployeeRequest
from gleamy.domain.assignments.service import AssignmentService
from gleamy.domain.bookings.schemas import BookingCreate, BookingUpdate
from gleamy.domain.bookings.service import BookingService
from gleamy.domain.errors import Conflict, Forbidden, InvalidTransition, NotFound
from gleamy.models import (
    AssignmentStatus,
    Booking,
    BookingStatus,
    JobAssignment,
    MediaType,
    PaymentStatus,
    UploadedMedia,
)


def booking_request(service, **overrides):
    data = {
        "serviceId": service.id,
        "scheduledDate": date(2026, 3, 14),
        "scheduledTime": "09:30",
    }
    data.update(overrides)
    return BookingCreate(**data)


def create_booking(db, customer, service, **overrides):
    return BookingService(db).create_booking(
        booking_request(service, **overrides), actor_for(customer.user)
    )


# --- Create ---


def test_create_booking_defaults_from_service(db):
    customer = make_customer(db)
    service = make_service(db, base_price=8000, duration=180)

    booking = create_booking(db, customer, service)

    assert booking.status == BookingStatus.PENDING
    assert booking.payment_status == PaymentStatus.PENDING
    assert booking.estimated_price == 8000
    assert booking.duration == 180
    assert booking.final_price is None
    assert booking.environment_images == []
    assert booking.booking_number.startswith("GLM-")
    assert booking.customer_id == customer.id


def test_create_booking_uses_supplied_duration_and_location(db):
    customer = make_customer(db)
    service = make_service(db)

    booking = create_booking(
        db,
        customer,
        service,
        duration=90,
        address="5 Lake Drive",
        city="Kandy",
        postalCode="20000",
        specialInstructions="Ring twice",
    )

    assert booking.duration == 90
    assert booking.address == "5 Lake Drive"
    assert booking.city == "Kandy"
    assert booking.postal_code == "20000"
    assert booking.special_instructions == "Ring twice"


def test_create_booking_location_defaults_to_customer_address(db):
    customer = make_customer(db, address="12 Galle Road", city="Colombo", postal_code="00300")
    booking = create_booking(db, customer, make_service(db))

    assert (booking.address, booking.city, booking.postal_code) == (
        "12 Galle Road",
        "Colombo",
        "00300",
    )


def test_estimated_price_is_a_snapshot(db):
    customer = make_customer(db)
    service = make_service(db, base_price=5000)
    booking = create_booking(db, customer, service)

    service.base_price = 9900
    db.commit()
    db.refresh(booking)

    assert booking.estimated_price == 5000


def test_create_booking_for_inactive_service_fails(db):
    customer = make_customer(db)
    service = make_service(db, is_active=False)

    with pytest.raises(NotFound):
        create_booking(db, customer, service)
    assert db.query(Booking).count() == 0


def test_create_booking_for_unknown_service_fails(db):
    customer = make_customer(db)
    with pytest.raises(NotFound):
        BookingService(db).create_booking(
            BookingCreate(serviceId=999, scheduledDate=date(2026, 3, 14), scheduledTime="10:00"),
            actor_for(customer.user),
        )


def test_create_booking_requires_customer_profile(db):
    admin = make_admin(db)
    service = make_service(db)
    with pytest.raises(NotFound):
        BookingService(db).create_booking(booking_request(service), actor_for(admin))


def test_booking_number_collision_is_retried(db):
    customer = make_customer(db)
    service = make_service(db)
    existing = create_booking(db, customer, service)

    numbers = iter([existing.booking_number, "GLM-20260314-FRESH234"])
    booking = BookingService(db, number_factory=lambda: next(numbers)).create_booking(
        booking_request(service), actor_for(customer.user)
    )

    assert booking.booking_number == "GLM-20260314-FRESH234"


def test_booking_number_retries_are_bounded(db):
    customer = make_customer(db)
    service = make_service(db)
    existing = create_booking(db, customer, service)

    calls = []

    def always_taken():
        calls.append(1)
        return existing.booking_number

    with pytest.raises(Conflict):
        BookingService(db, number_factory=always_taken, max_number_attempts=3).create_booking(
            booking_request(service), actor_for(customer.user)
        )
    assert len(calls) == 3
    assert db.query(Booking).count() == 1


# --- Update ---


def test_owner_can_update_pending_booking(db):
    customer = make_customer(db)
    booking = create_booking(db, customer, make_service(db))

    updated = BookingService(db).update_booking(
        booking.id,
        BookingUpdate(scheduledTime="14:00", specialInstructions="Bring ladder"),
        actor_for(customer.user),
    )

    assert updated.scheduled_time == "14:00"
    assert updated.special_instructions == "Bring ladder"
    assert updated.scheduled_date == date(2026, 3, 14)
    assert updated.status == BookingStatus.PENDING


def test_admin_can_update_booking(db):
    customer = make_customer(db)
    booking = create_booking(db, customer, make_service(db))
    admin = make_admin(db)

    updated = BookingService(db).update_booking(
        booking.id, BookingUpdate(city="Galle"), actor_for(admin)
    )
    assert updated.city == "Galle"


def test_other_customer_cannot_update_booking(db):
    booking = create_booking(db, make_customer(db), make_service(db))
    intruder = make_customer(db)

    with pytest.raises(Forbidden):
        BookingService(db).update_booking(
            booking.id, BookingUpdate(city="Galle"), actor_for(intruder.user)
        )


@pytest.mark.parametrize("status", [BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED, BookingStatus.CANCELLED])
def test_update_rejected_once_work_started(db, status):
    customer = make_customer(db)
    booking = create_booking(db, customer, make_service(db))
    booking.status = status
    db.commit()

    with pytest.raises(Conflict):
        BookingService(db).update_booking(
            booking.id, BookingUpdate(city="Galle"), actor_for(customer.user)
        )
    db.refresh(booking)
    assert booking.city == "Colombo"


def test_update_missing_booking(db):
    customer = make_customer(db)
    with pytest.raises(NotFound):
        BookingService(db).update_booking(999, BookingUpdate(city="Galle"), actor_for(customer.user))


# --- Cancel ---


@pytest.mark.parametrize("status", [BookingStatus.PENDING, BookingStatus.CONFIRMED])
def test_cancel_from_pending_or_confirmed(db, status):
    customer = make_customer(db)
    booking = create_booking(db, customer, make_service(db))
    booking.status = status
    db.commit()

    cancelled = BookingService(db).cancel_booking(booking.id, actor_for(customer.user))
    assert cancelled.status == BookingStatus.CANCELLED


@pytest.mark.parametrize(
    "status", [BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED, BookingStatus.CANCELLED]
)
def test_cancel_rejected_from_later_states(db, status):
    customer = make_customer(db)
    booking = create_booking(db, customer, make_service(db))
    booking.status = status
    db.commit()

    with pytest.raises(InvalidTransition):
        BookingService(db).cancel_booking(booking.id, actor_for(customer.user))
    db.refresh(booking)
    assert booking.status == status


def test_cancel_releases_assignment_and_employee(db):
    customer = make_customer(db)
    employee = make_employee(db)
    booking = create_booking(db, customer, make_service(db))
    AssignmentService(db).assign_employee(
        AssignEmployeeRequest(bookingId=booking.id, employeeId=employee.id)
    )
    db.refresh(employee)
    assert employee.is_available is False

    BookingService(db).cancel_booking(booking.id, actor_for(customer.user))

    assignment = db.query(JobAssignment).filter_by(booking_id=booking.id).one()
    db.refresh(employee)
    assert assignment.voided_at is not None
    assert assignment.status == AssignmentStatus.ASSIGNED
    assert not assignment.is_active
    assert employee.is_available is True
    assert employee.active_job_count == 0


def test_other_customer_cannot_cancel(db):
    booking = create_booking(db, make_customer(db), make_service(db))
    with pytest.raises(Forbidden):
        BookingService(db).cancel_booking(booking.id, actor_for(make_customer(db).user))


# --- Environment images ---


def test_environment_images_append_in_order(db):
    customer = make_customer(db)
    booking = create_booking(db, customer, make_service(db))
    service = BookingService(db)
    actor = actor_for(customer.user)

    service.attach_environment_images(booking.id, ["img-a", "img-b"], actor)
    images = service.attach_environment_images(booking.id, ["img-a"], actor)

    assert images == ["img-a", "img-b", "img-a"]
    media = db.query(UploadedMedia).filter_by(booking_id=booking.id).order_by(UploadedMedia.id).all()
    assert [m.reference for m in media] == ["img-a", "img-b", "img-a"]
    assert all(m.media_type == MediaType.IMAGE for m in media)
    db.refresh(booking)
    assert booking.status == BookingStatus.PENDING


def test_only_owner_attaches_environment_images(db):
    booking = create_booking(db, make_customer(db), make_service(db))
    with pytest.raises(Forbidden):
        BookingService(db).attach_environment_images(
            booking.id, ["img-a"], actor_for(make_admin(db))
        )
    assert db.query(UploadedMedia).count() == 0


# --- Reads ---


def test_get_booking_access(db):
    customer = make_customer(db)
    employee = make_employee(db)
    booking = create_booking(db, customer, make_service(db))
    AssignmentService(db).assign_employee(
        AssignEmployeeRequest(bookingId=booking.id, employeeId=employee.id)
    )
    service = BookingService(db)

    assert service.get_booking(booking.id, actor_for(customer.user)).id == booking.id
    assert service.get_booking(booking.id, actor_for(make_admin(db))).id == booking.id
    assert service.get_booking(booking.id, actor_for(employee.user)).id == booking.id

    with pytest.raises(Forbidden):
        service.get_booking(booking.id, actor_for(make_customer(db).user))
    with pytest.raises(NotFound):
        service.get_booking(999, actor_for(customer.user))


def test_my_bookings_only_lists_own(db):
    customer = make_customer(db)
    other = make_customer(db)
    service = make_service(db)
    mine = [create_booking(db, customer, service) for _ in range(2)]
    create_booking(db, other, service)

    bookings = BookingService(db).get_my_bookings(actor_for(customer.user))

    assert {b.id for b in bookings} == {b.id for b in mine}
    assert bookings[0].id == mine[-1].id


def test_list_bookings_filters_and_paginates(db):
    customer = make_customer(db)
    service = make_service(db)
    bookings = [create_booking(db, customer, service) for _ in range(5)]
    bookings[0].status = BookingStatus.CANCELLED
    db.commit()

    page, total = BookingService(db).list_bookings(None, page=2, limit=2)
    assert total == 5
    assert len(page) == 2

    pending, total = BookingService(db).list_bookings(BookingStatus.PENDING, page=1, limit=10)
    assert total == 4
    assert all(b.status == BookingStatus.PENDING for b in pending)
