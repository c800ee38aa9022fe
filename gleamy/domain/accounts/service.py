"""Account service - registration, profiles and account deactivation"""

from sqlalchemy.orm import Session

from ...database import atomic
from ...models import Customer, User, UserRole, UserStatus
from ..errors import Conflict, Forbidden, InvalidRequest, NotFound
from .repository import AccountRepository
from .schemas import ProfileUpdate, RegisterRequest

# ProfileUpdate field -> column
USER_FIELDS = {"displayName": "display_name", "phoneNumber": "phone_number", "photoURL": "photo_url"}
CUSTOMER_FIELDS = {"address": "address", "city": "city", "postalCode": "postal_code"}


class AccountService:
    """Service layer for user accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AccountRepository()

    def register(self, claims: dict, data: RegisterRequest) -> User:
        """
        Create the user for a verified Firebase identity.

        Only customers can sign themselves up; employees are created by an
        administrator. A customer profile is created alongside the user.
        """
        if data.role != UserRole.CUSTOMER:
            raise Forbidden("Only customer accounts can be self-registered")

        firebase_uid = claims["uid"]
        if self.repo.get_user_by_firebase_uid(self.db, firebase_uid):
            raise Conflict("User already exists")

        email = (claims.get("email") or data.email or "").strip().lower()
        if not email:
            raise InvalidRequest("An email address is required to register")
        if self.repo.get_user_by_email(self.db, email):
            raise Conflict("This email is already registered")

        with atomic(self.db):
            user = self.repo.add_user(
                self.db,
                User(
                    firebase_uid=firebase_uid,
                    email=email,
                    display_name=data.displayName or claims.get("name"),
                    phone_number=data.phoneNumber,
                    photo_url=data.photoURL or claims.get("picture"),
                    role=UserRole.CUSTOMER,
                    status=UserStatus.ACTIVE,
                    email_verified=bool(claims.get("email_verified", False)),
                ),
            )
            self.repo.add_customer(self.db, Customer(user_id=user.id))

        return self.get_profile(user.id)

    def get_profile(self, user_id: int) -> User:
        user = self.repo.get_user_detail(self.db, user_id)
        if not user:
            raise NotFound("User not found")
        return user

    def update_profile(self, user: User, data: ProfileUpdate) -> User:
        """Partial update of the user and, for customers, their default address"""
        updates = data.model_dump(exclude_unset=True)

        with atomic(self.db):
            for field, column in USER_FIELDS.items():
                if field in updates:
                    setattr(user, column, updates[field])

            if user.role == UserRole.CUSTOMER:
                customer = self.repo.get_customer_by_user_id(self.db, user.id)
                if customer:
                    for field, column in CUSTOMER_FIELDS.items():
                        if field in updates:
                            setattr(customer, column, updates[field])

        return self.get_profile(user.id)

    def deactivate_account(self, user: User) -> None:
        with atomic(self.db):
            user.status = UserStatus.INACTIVE

    def list_customers(self) -> list[Customer]:
        return self.repo.get_customers(self.db)
