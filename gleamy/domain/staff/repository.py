"""Staff repository - Database operations for employee accounts"""

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload

from ...models import Employee, JobAssignment, User


class StaffRepository:
    """Repository for employee database operations"""

    @staticmethod
    def get_employees(db: Session) -> list[Employee]:
        """All employees with their user and assignments, newest first"""
        return (
            db.query(Employee)
            .options(
                joinedload(Employee.user),
                joinedload(Employee.assignments).joinedload(JobAssignment.booking),
            )
            .order_by(Employee.created_at.desc(), Employee.id.desc())
            .all()
        )

    @staticmethod
    def get_employee(db: Session, employee_id: int) -> Optional[Employee]:
        return (
            db.query(Employee)
            .options(joinedload(Employee.user))
            .filter(Employee.id == employee_id)
            .first()
        )

    @staticmethod
    def identity_taken(db: Session, firebase_uid: str, email: str) -> bool:
        return (
            db.query(User.id)
            .filter(or_(User.firebase_uid == firebase_uid, User.email == email))
            .first()
            is not None
        )

    @staticmethod
    def employee_code_exists(db: Session, employee_code: str) -> bool:
        return (
            db.query(Employee.id).filter(Employee.employee_code == employee_code).first()
            is not None
        )

    @staticmethod
    def add(db: Session, instance):
        db.add(instance)
        db.flush()
        return instance
