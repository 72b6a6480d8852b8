import logging
from contextlib import contextmanager

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import validate_request
from app.core.errors import ApiError
from app.db.database import get_db
from app.schemas.student import (
    AddStudentRequest,
    DeleteStudentRequest,
    ListStudentsRequest,
    MessageResponse,
    StudentDetailRequest,
    StudentDetailResponse,
    StudentListResponse,
    StudentStatusRequest,
    UpdateStudentRequest,
)
from app.services import student_service
from app.services.student_payload import build_list_filter, build_student_payload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/students", tags=["Students"])


@contextmanager
def _service_errors(failure_message: str):
    """Re-raise classified errors unchanged; anything else becomes a generic 500."""
    try:
        yield
    except ApiError:
        raise
    except Exception:
        logger.exception(failure_message)
        raise ApiError(status.HTTP_500_INTERNAL_SERVER_ERROR, failure_message)


@router.get("/", response_model=StudentListResponse)
def list_students(
    req: ListStudentsRequest = Depends(validate_request(ListStudentsRequest)),
    db: Session = Depends(get_db),
):
    query = req.query
    with _service_errors("Failed to retrieve students"):
        students = student_service.list_students(db, build_list_filter(query))

    # total reflects the returned rows, not a separate count of all matches
    return {
        "success": True,
        "data": students,
        "pagination": {"page": query.page, "limit": query.limit, "total": len(students)},
    }


@router.post("/", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
def add_student(
    req: AddStudentRequest = Depends(validate_request(AddStudentRequest)),
    db: Session = Depends(get_db),
):
    body = req.body
    payload = build_student_payload(
        "add", body.reporter_id, body.basic_details, body.additional_details,
    )
    with _service_errors("Failed to add student"):
        result = student_service.create_student(db, payload)
    return {"success": True, "message": result["message"]}


@router.get("/{id}", response_model=StudentDetailResponse)
def get_student_detail(
    req: StudentDetailRequest = Depends(validate_request(StudentDetailRequest)),
    db: Session = Depends(get_db),
):
    with _service_errors("Failed to retrieve student details"):
        student = student_service.get_student_by_id(db, req.params.id)
    return {"success": True, "data": student}


@router.post("/{id}/status", response_model=MessageResponse)
def set_student_status(
    req: StudentStatusRequest = Depends(validate_request(StudentStatusRequest)),
    db: Session = Depends(get_db),
):
    payload = {
        "userId": req.params.id,
        "reviewerId": req.body.reviewer_id,
        "status": req.body.status,
    }
    with _service_errors("Failed to update student status"):
        result = student_service.set_student_status(db, payload)
    return {"success": True, "message": result["message"]}


@router.put("/{id}", response_model=MessageResponse)
def update_student(
    req: UpdateStudentRequest = Depends(validate_request(UpdateStudentRequest)),
    db: Session = Depends(get_db),
):
    body = req.body
    payload = build_student_payload(
        "update", body.reporter_id, body.basic_details, body.additional_details,
        user_id=req.params.id,
    )
    with _service_errors("Failed to update student"):
        result = student_service.update_student(db, payload)
    return {"success": True, "message": result["message"]}


@router.delete("/{id}", response_model=MessageResponse)
def delete_student(
    req: DeleteStudentRequest = Depends(validate_request(DeleteStudentRequest)),
    db: Session = Depends(get_db),
):
    with _service_errors("Failed to delete student"):
        result = student_service.delete_student(db, req.params.id)
    return {"success": True, "message": result["message"]}
