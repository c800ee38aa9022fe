"""Admin router - bookings overview, customers, staff and job assignment"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ... import config
from ...auth import require_admin
from ...database import get_db
from ...models import BookingStatus, User
from ...shared.responses import success
from ..accounts.schemas import CustomerListItem
from ..accounts.service import AccountService
from ..assignments.schemas import AssignEmployeeRequest, AssignmentResponse
from ..assignments.service import AssignmentService
from ..bookings.schemas import BookingDetailResponse
from ..bookings.service import BookingService
from ..staff.schemas import EmployeeCreate, EmployeeListItem, EmployeeResponse, EmployeeUpdate
from ..staff.service import StaffService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    return AssignmentService(db)


def get_staff_service(db: Session = Depends(get_db)) -> StaffService:
    return StaffService(db)


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    return AccountService(db)


# ============================================================================
# BOOKINGS & CUSTOMERS
# ============================================================================


@router.get("/bookings")
async def get_all_bookings(
    status: Optional[BookingStatus] = Query(None),
    page: int = Query(1),
    limit: int = Query(config.DEFAULT_PAGE_SIZE),
    service: BookingService = Depends(get_booking_service),
):
    """Paginated list of all bookings, newest first"""
    bookings, total = service.list_bookings(status, page, limit)
    return success(
        {"bookings": [BookingDetailResponse.model_validate(b) for b in bookings]},
        results=len(bookings),
        total=total,
    )


@router.get("/customers")
async def get_all_customers(service: AccountService = Depends(get_account_service)):
    customers = service.list_customers()
    return success(
        {"customers": [CustomerListItem.model_validate(c) for c in customers]},
        results=len(customers),
    )


# ============================================================================
# EMPLOYEES
# ============================================================================


@router.get("/employees")
async def get_all_employees(service: StaffService = Depends(get_staff_service)):
    employees = service.list_employees()
    return success(
        {"employees": [EmployeeListItem.model_validate(e) for e in employees]},
        results=len(employees),
    )


@router.post("/employees", status_code=201)
async def create_employee(
    data: EmployeeCreate,
    current_user: User = Depends(require_admin),
    service: StaffService = Depends(get_staff_service),
):
    employee = service.create_employee(data)
    logger.info(f"👷 Employee {employee.employee_code} created by {current_user.email}")
    return success(
        {"employee": EmployeeResponse.model_validate(employee)},
        message="Employee created successfully",
    )


@router.put("/employees/{employee_id}")
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    service: StaffService = Depends(get_staff_service),
):
    employee = service.update_employee(employee_id, data)
    return success(
        {"employee": EmployeeResponse.model_validate(employee)},
        message="Employee updated successfully",
    )


@router.delete("/employees/{employee_id}")
async def deactivate_employee(
    employee_id: int,
    current_user: User = Depends(require_admin),
    service: StaffService = Depends(get_staff_service),
):
    """Deactivate the employee's account instead of deleting it"""
    employee = service.deactivate_employee(employee_id)
    logger.info(f"🔒 Employee {employee.employee_code} deactivated by {current_user.email}")
    return success(message="Employee deactivated successfully")


# ============================================================================
# JOBS
# ============================================================================


@router.post("/jobs/assign", status_code=201)
async def assign_job(
    data: AssignEmployeeRequest,
    current_user: User = Depends(require_admin),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Assign an available employee to a pending booking and confirm it"""
    assignment = service.assign_employee(data)
    logger.info(
        f"📋 Booking {data.bookingId} assigned to employee {data.employeeId} by {current_user.email}"
    )
    return success(
        {"assignment": AssignmentResponse.model_validate(assignment)},
        message="Job assigned successfully",
    )
