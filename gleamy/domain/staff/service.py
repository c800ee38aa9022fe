"""Staff service - administrator management of employee accounts"""

from sqlalchemy.orm import Session

from ...database import atomic
from ...models import Employee, User, UserRole, UserStatus
from ...shared.identifiers import generate_employee_code
from ..errors import Conflict, NotFound
from .repository import StaffRepository
from .schemas import EmployeeCreate, EmployeeUpdate

# EmployeeUpdate field -> Employee column
EMPLOYEE_FIELDS = {"position": "position", "skills": "skills", "experience": "experience"}

EMPLOYEE_CODE_ATTEMPTS = 5


class StaffService:
    """Service layer for employee accounts"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = StaffRepository()

    def list_employees(self) -> list[Employee]:
        return self.repo.get_employees(self.db)

    def get_employee(self, employee_id: int) -> Employee:
        employee = self.repo.get_employee(self.db, employee_id)
        if not employee:
            raise NotFound("Employee not found")
        return employee

    def create_employee(self, data: EmployeeCreate) -> Employee:
        """Create an EMPLOYEE user plus employee profile with a generated code"""
        if self.repo.identity_taken(self.db, data.firebaseUid, data.email):
            raise Conflict("A user with this Firebase UID or email already exists")

        employee_code = self._new_employee_code()

        with atomic(self.db):
            user = self.repo.add(
                self.db,
                User(
                    firebase_uid=data.firebaseUid,
                    email=data.email,
                    display_name=data.displayName,
                    phone_number=data.phoneNumber,
                    role=UserRole.EMPLOYEE,
                    status=UserStatus.ACTIVE,
                ),
            )
            employee = self.repo.add(
                self.db,
                Employee(
                    user_id=user.id,
                    employee_code=employee_code,
                    position=data.position,
                    skills=list(data.skills),
                    experience=data.experience,
                    hire_date=data.hireDate,
                    is_available=True,
                    active_job_count=0,
                ),
            )

        return self.get_employee(employee.id)

    def update_employee(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = self.get_employee(employee_id)
        updates = data.model_dump(exclude_unset=True)

        with atomic(self.db):
            for field, column in EMPLOYEE_FIELDS.items():
                if field in updates and not (field == "skills" and updates[field] is None):
                    setattr(employee, column, updates[field])

        return self.get_employee(employee.id)

    def deactivate_employee(self, employee_id: int) -> Employee:
        """Deactivate the employee's user; the record and its history are kept"""
        employee = self.get_employee(employee_id)
        with atomic(self.db):
            employee.user.status = UserStatus.INACTIVE
        return employee

    def _new_employee_code(self) -> str:
        for _ in range(EMPLOYEE_CODE_ATTEMPTS):
            code = generate_employee_code()
            if not self.repo.employee_code_exists(self.db, code):
                return code
        raise Conflict("Could not allocate a unique employee code, please retry")
