"""Account repository - Database operations for users and customers"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Customer, User


class AccountRepository:
    """Repository for user and customer database operations"""

    @staticmethod
    def get_user_by_firebase_uid(db: Session, firebase_uid: str) -> Optional[User]:
        return db.query(User).filter(User.firebase_uid == firebase_uid).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_user_detail(db: Session, user_id: int) -> Optional[User]:
        return (
            db.query(User)
            .options(joinedload(User.customer), joinedload(User.employee))
            .filter(User.id == user_id)
            .first()
        )

    @staticmethod
    def get_customer_by_user_id(db: Session, user_id: int) -> Optional[Customer]:
        return db.query(Customer).filter(Customer.user_id == user_id).first()

    @staticmethod
    def add_user(db: Session, user: User) -> User:
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def add_customer(db: Session, customer: Customer) -> Customer:
        db.add(customer)
        db.flush()
        return customer

    @staticmethod
    def get_customers(db: Session) -> list[Customer]:
        """All customers with their user and bookings, newest first"""
        return (
            db.query(Customer)
            .options(joinedload(Customer.user), joinedload(Customer.bookings))
            .order_by(Customer.created_at.desc(), Customer.id.desc())
            .all()
        )
