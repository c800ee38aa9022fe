"""Employee job router - FastAPI endpoints for an employee's assigned jobs"""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import employee_actor
from ...database import get_db
from ...shared.responses import success
from ..actor import Actor
from .schemas import (
    AssignmentDetailResponse,
    AssignmentResponse,
    JobImagesRequest,
    JobStatusUpdate,
)
from .service import AssignmentService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/employees", tags=["Employee Jobs"])


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    """Dependency injection for AssignmentService"""
    return AssignmentService(db)


@router.get("/jobs")
async def get_my_jobs(
    actor: Actor = Depends(employee_actor),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Get all jobs assigned to the current employee, newest first"""
    assignments = service.get_my_jobs(actor)
    return success(
        {"assignments": [AssignmentResponse.model_validate(a) for a in assignments]},
        results=len(assignments),
    )


@router.get("/jobs/{assignment_id}")
async def get_job(
    assignment_id: int,
    actor: Actor = Depends(employee_actor),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Get job details including the booking's customer and media"""
    assignment = service.get_job(assignment_id, actor)
    return success({"assignment": AssignmentDetailResponse.model_validate(assignment)})


@router.put("/jobs/{assignment_id}/status")
async def update_job_status(
    assignment_id: int,
    data: JobStatusUpdate,
    actor: Actor = Depends(employee_actor),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Start or complete a job; the booking follows the job's progress"""
    assignment = service.advance_status(assignment_id, data.status, actor, data.notes)
    logger.info(
        f"🧹 Job {assignment_id} moved to {assignment.status.value} by user {actor.subject_id}"
    )
    return success(
        {"assignment": AssignmentResponse.model_validate(assignment)},
        message="Job status updated successfully",
    )


@router.post("/jobs/{assignment_id}/images")
async def upload_job_images(
    assignment_id: int,
    data: JobImagesRequest,
    actor: Actor = Depends(employee_actor),
    service: AssignmentService = Depends(get_assignment_service),
):
    """Replace the before or after images of a job"""
    images = service.attach_job_images(assignment_id, data.type, data.images, actor)
    logger.info(f"📸 {len(images)} {data.type.value} image(s) set on job {assignment_id}")
    return success(
        {"assignment_id": assignment_id, "type": data.type, "uploadedImages": images},
        message="Images uploaded successfully",
    )
