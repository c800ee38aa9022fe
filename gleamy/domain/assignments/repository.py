"""Job assignment repository - Database operations for assignments and employee availability"""

from typing import Optional

from sqlalchemy import case, select, update
from sqlalchemy.orm import Session, joinedload

from ...models import (
    AssignmentStatus,
    Booking,
    Customer,
    Employee,
    JobAssignment,
    User,
    UserStatus,
)


class AssignmentRepository:
    """Repository for job assignment database operations"""

    @staticmethod
    def get_assignment_by_id(db: Session, assignment_id: int) -> Optional[JobAssignment]:
        return db.query(JobAssignment).filter(JobAssignment.id == assignment_id).first()

    @staticmethod
    def get_assignment_detail(db: Session, assignment_id: int) -> Optional[JobAssignment]:
        return (
            db.query(JobAssignment)
            .options(
                joinedload(JobAssignment.booking).joinedload(Booking.service),
                joinedload(JobAssignment.booking)
                .joinedload(Booking.customer)
                .joinedload(Customer.user),
                joinedload(JobAssignment.booking).joinedload(Booking.uploaded_media),
                joinedload(JobAssignment.employee).joinedload(Employee.user),
            )
            .filter(JobAssignment.id == assignment_id)
            .first()
        )

    @staticmethod
    def get_active_assignment_for_booking(
        db: Session, booking_id: int
    ) -> Optional[JobAssignment]:
        return (
            db.query(JobAssignment)
            .filter(
                JobAssignment.booking_id == booking_id,
                JobAssignment.status != AssignmentStatus.COMPLETED,
                JobAssignment.voided_at.is_(None),
            )
            .first()
        )

    @staticmethod
    def get_employee_assignments(db: Session, employee_id: int) -> list[JobAssignment]:
        """Get all assignments for an employee, newest first"""
        return (
            db.query(JobAssignment)
            .options(
                joinedload(JobAssignment.booking).joinedload(Booking.service),
                joinedload(JobAssignment.booking)
                .joinedload(Booking.customer)
                .joinedload(Customer.user),
            )
            .filter(JobAssignment.employee_id == employee_id)
            .order_by(JobAssignment.assigned_at.desc(), JobAssignment.id.desc())
            .all()
        )

    @staticmethod
    def add_assignment(db: Session, assignment: JobAssignment) -> JobAssignment:
        db.add(assignment)
        db.flush()
        return assignment

    @staticmethod
    def transition_assignment(
        db: Session,
        assignment_id: int,
        expected: AssignmentStatus,
        **values,
    ) -> bool:
        """Conditional write keyed on the status the caller read; voided assignments never match"""
        result = db.execute(
            update(JobAssignment)
            .where(
                JobAssignment.id == assignment_id,
                JobAssignment.status == expected,
                JobAssignment.voided_at.is_(None),
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def void_assignment(db: Session, assignment_id: int, voided_at) -> bool:
        result = db.execute(
            update(JobAssignment)
            .where(
                JobAssignment.id == assignment_id,
                JobAssignment.status != AssignmentStatus.COMPLETED,
                JobAssignment.voided_at.is_(None),
            )
            .values(voided_at=voided_at)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def update_images(db: Session, assignment_id: int, **images) -> None:
        db.execute(
            update(JobAssignment)
            .where(JobAssignment.id == assignment_id)
            .values(**images)
            .execution_options(synchronize_session=False)
        )

    # Employee availability
    @staticmethod
    def get_employee_by_id(db: Session, employee_id: int) -> Optional[Employee]:
        return (
            db.query(Employee)
            .options(joinedload(Employee.user))
            .filter(Employee.id == employee_id)
            .first()
        )

    @staticmethod
    def get_employee_by_user_id(db: Session, user_id: int) -> Optional[Employee]:
        return db.query(Employee).filter(Employee.user_id == user_id).first()

    @staticmethod
    def claim_employee(db: Session, employee_id: int, max_active_jobs: int) -> bool:
        """
        Take one job slot. Fails when the employee is unavailable or already
        holds max_active_jobs; is_available drops once the limit is reached.
        """
        result = db.execute(
            update(Employee)
            .where(
                Employee.id == employee_id,
                Employee.is_available.is_(True),
                Employee.active_job_count < max_active_jobs,
                Employee.user_id.in_(
                    select(User.id).where(User.status == UserStatus.ACTIVE)
                ),
            )
            .values(
                active_job_count=Employee.active_job_count + 1,
                is_available=case(
                    (Employee.active_job_count + 1 < max_active_jobs, True), else_=False
                ),
            )
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1

    @staticmethod
    def release_employee(db: Session, employee_id: int) -> None:
        """Give back one job slot and make the employee available again"""
        db.execute(
            update(Employee)
            .where(Employee.id == employee_id)
            .values(
                active_job_count=case(
                    (Employee.active_job_count > 0, Employee.active_job_count - 1), else_=0
                ),
                is_available=True,
            )
            .execution_options(synchronize_session=False)
        )
