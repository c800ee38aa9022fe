"""Tests for the job assignment service."""

from datetime import date

import pytest

from conftest import actor_for, make_admin, make_customer, make_employee, make_service
from gleamy.domain.assignments.schemas import AssignEmployeeRequest, ImageKind, JobStatusUpdate
from gleamy.domain.assignments.service import AssignmentService
from gleamy.domain.bookings.schemas import BookingCreate
from gleamy.domain.bookings.service import BookingService
from gleamy.domain.errors import Conflict, Forbidden, InvalidTransition, NotFound, Unavailable
from gleamy.models import AssignmentStatus, BookingStatus, JobAssignment, UserStatus


@pytest.fixture
def booking(db):
    customer = make_customer(db)
    service = make_service(db, base_price=8000, duration=180)
    return BookingService(db).create_booking(
        BookingCreate(serviceId=service.id, scheduledDate=date(2026, 3, 14), scheduledTime="09:30"),
        actor_for(customer.user),
    )


def assign(db, booking, employee, **kwargs):
    return AssignmentService(db, **kwargs).assign_employee(
        AssignEmployeeRequest(bookingId=booking.id, employeeId=employee.id, notes="Gate code 4412")
    )


# --- AssignEmployee ---


def test_assign_confirms_booking_and_claims_employee(db, booking):
    employee = make_employee(db)

    assignment = assign(db, booking, employee)

    db.refresh(booking)
    db.refresh(employee)
    assert assignment.status == AssignmentStatus.ASSIGNED
    assert assignment.assigned_at is not None
    assert assignment.notes == "Gate code 4412"
    assert booking.status == BookingStatus.CONFIRMED
    assert employee.is_available is False
    assert employee.active_job_count == 1


def test_second_assignment_conflicts(db, booking):
    first = make_employee(db)
    second = make_employee(db)
    assign(db, booking, first)

    with pytest.raises(Conflict):
        assign(db, booking, second)

    db.refresh(second)
    assert db.query(JobAssignment).filter_by(booking_id=booking.id).count() == 1
    assert second.is_available is True
    assert second.active_job_count == 0


@pytest.mark.parametrize(
    "status", [BookingStatus.IN_PROGRESS, BookingStatus.COMPLETED, BookingStatus.CANCELLED]
)
def test_assign_requires_pending_booking(db, booking, status):
    booking.status = status
    db.commit()

    with pytest.raises(Conflict):
        assign(db, booking, make_employee(db))
    assert db.query(JobAssignment).count() == 0


def test_assign_unavailable_employee(db, booking):
    busy = make_employee(db, is_available=False)

    with pytest.raises(Unavailable):
        assign(db, booking, busy)

    db.refresh(booking)
    assert booking.status == BookingStatus.PENDING
    assert db.query(JobAssignment).count() == 0


def test_assign_inactive_employee(db, booking):
    inactive = make_employee(db, status=UserStatus.INACTIVE)

    with pytest.raises(Unavailable):
        assign(db, booking, inactive)


def test_employee_busy_with_another_job(db, booking):
    employee = make_employee(db)
    assign(db, booking, employee)

    customer = make_customer(db)
    other = BookingService(db).create_booking(
        BookingCreate(
            serviceId=booking.service_id, scheduledDate=date(2026, 3, 15), scheduledTime="11:00"
        ),
        actor_for(customer.user),
    )

    with pytest.raises(Unavailable):
        assign(db, other, employee)
    db.refresh(other)
    assert other.status == BookingStatus.PENDING


def test_higher_job_limit_allows_parallel_jobs(db, booking):
    employee = make_employee(db)
    assign(db, booking, employee, max_active_jobs=2)
    db.refresh(employee)
    assert employee.is_available is True
    assert employee.active_job_count == 1

    customer = make_customer(db)
    other = BookingService(db).create_booking(
        BookingCreate(
            serviceId=booking.service_id, scheduledDate=date(2026, 3, 15), scheduledTime="11:00"
        ),
        actor_for(customer.user),
    )
    assign(db, other, employee, max_active_jobs=2)
    db.refresh(employee)
    assert employee.is_available is False
    assert employee.active_job_count == 2


def test_assign_missing_booking_or_employee(db, booking):
    employee = make_employee(db)
    service = AssignmentService(db)

    with pytest.raises(NotFound):
        service.assign_employee(AssignEmployeeRequest(bookingId=999, employeeId=employee.id))
    with pytest.raises(NotFound):
        service.assign_employee(AssignEmployeeRequest(bookingId=booking.id, employeeId=999))


# --- AdvanceStatus ---


def test_start_then_complete_job(db, booking):
    employee = make_employee(db)
    assignment = assign(db, booking, employee)
    service = AssignmentService(db)
    actor = actor_for(employee.user)

    started = service.advance_status(assignment.id, AssignmentStatus.STARTED, actor)
    db.refresh(booking)
    assert started.status == AssignmentStatus.STARTED
    assert started.started_at is not None
    assert booking.status == BookingStatus.IN_PROGRESS

    completed = service.advance_status(
        assignment.id, AssignmentStatus.COMPLETED, actor, notes="All rooms done"
    )
    db.refresh(booking)
    db.refresh(employee)
    assert completed.status == AssignmentStatus.COMPLETED
    assert completed.completed_at is not None
    assert completed.notes == "All rooms done"
    assert booking.status == BookingStatus.COMPLETED
    assert employee.is_available is True
    assert employee.active_job_count == 0


def test_skipping_start_is_rejected_without_writes(db, booking):
    employee = make_employee(db)
    assignment = assign(db, booking, employee)

    with pytest.raises(InvalidTransition):
        AssignmentService(db).advance_status(
            assignment.id, AssignmentStatus.COMPLETED, actor_for(employee.user), notes="nope"
        )

    db.refresh(assignment)
    db.refresh(booking)
    db.refresh(employee)
    assert assignment.status == AssignmentStatus.ASSIGNED
    assert assignment.completed_at is None
    assert assignment.notes == "Gate code 4412"
    assert booking.status == BookingStatus.CONFIRMED
    assert employee.active_job_count == 1


def test_completed_job_cannot_move_again(db, booking):
    employee = make_employee(db)
    assignment = assign(db, booking, employee)
    service = AssignmentService(db)
    actor = actor_for(employee.user)
    service.advance_status(assignment.id, AssignmentStatus.STARTED, actor)
    service.advance_status(assignment.id, AssignmentStatus.COMPLETED, actor)

    for target in (AssignmentStatus.STARTED, AssignmentStatus.COMPLETED, AssignmentStatus.ASSIGNED):
        with pytest.raises(InvalidTransition):
            service.advance_status(assignment.id, target, actor)


def test_only_assigned_employee_advances(db, booking):
    assignment = assign(db, booking, make_employee(db))
    service = AssignmentService(db)

    with pytest.raises(Forbidden):
        service.advance_status(
            assignment.id, AssignmentStatus.STARTED, actor_for(make_employee(db).user)
        )
    with pytest.raises(Forbidden):
        service.advance_status(assignment.id, AssignmentStatus.STARTED, actor_for(make_admin(db)))

    db.refresh(booking)
    assert booking.status == BookingStatus.CONFIRMED


def test_voided_assignment_cannot_start(db, booking):
    employee = make_employee(db)
    assignment = assign(db, booking, employee)
    BookingService(db).cancel_booking(booking.id, actor_for(booking.customer.user))

    with pytest.raises(InvalidTransition):
        AssignmentService(db).advance_status(
            assignment.id, AssignmentStatus.STARTED, actor_for(employee.user)
        )
    db.refresh(booking)
    assert booking.status == BookingStatus.CANCELLED


def test_status_request_accepts_lowercase_names():
    assert JobStatusUpdate(status="started").status == AssignmentStatus.STARTED
    assert JobStatusUpdate(status="COMPLETED").status == AssignmentStatus.COMPLETED


# --- Job images ---


def test_job_images_replace_per_kind(db, booking):
    employee = make_employee(db)
    assignment = assign(db, booking, employee)
    service = AssignmentService(db)
    actor = actor_for(employee.user)

    service.attach_job_images(assignment.id, ImageKind.BEFORE, ["b1", "b2"], actor)
    before = service.attach_job_images(assignment.id, ImageKind.BEFORE, ["b3"], actor)
    after = service.attach_job_images(assignment.id, ImageKind.AFTER, ["a1"], actor)

    db.refresh(assignment)
    assert before == ["b3"]
    assert after == ["a1"]
    assert assignment.before_images == ["b3"]
    assert assignment.after_images == ["a1"]
    assert assignment.status == AssignmentStatus.ASSIGNED


def test_job_images_only_by_assigned_employee(db, booking):
    assignment = assign(db, booking, make_employee(db))
    with pytest.raises(Forbidden):
        AssignmentService(db).attach_job_images(
            assignment.id, ImageKind.AFTER, ["a1"], actor_for(make_employee(db).user)
        )


# --- Reads ---


def test_my_jobs_and_job_details(db, booking):
    employee = make_employee(db)
    assignment = assign(db, booking, employee)
    service = AssignmentService(db)

    jobs = service.get_my_jobs(actor_for(employee.user))
    assert [j.id for j in jobs] == [assignment.id]

    assert service.get_job(assignment.id, actor_for(employee.user)).booking_id == booking.id
    assert service.get_job(assignment.id, actor_for(make_admin(db))).id == assignment.id
    with pytest.raises(Forbidden):
        service.get_job(assignment.id, actor_for(make_employee(db).user))
    with pytest.raises(NotFound):
        service.get_job(999, actor_for(employee.user))
