"""Student persistence: create, read, update, status and delete on users/students."""

import logging
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import ApiError
from app.models.student import Student
from app.models.user import User, STUDENT_ROLE_ID

logger = logging.getLogger(__name__)

# payload key -> User column
USER_COLUMNS = {
    "name": "name",
    "email": "email",
    "roleId": "role_id",
    "systemAccess": "has_system_access",
}

# payload key -> Student column
STUDENT_COLUMNS = {
    "gender": "gender",
    "phone": "phone",
    "dob": "dob",
    "class": "class_name",
    "section": "section_name",
    "roll": "roll",
    "fatherName": "father_name",
    "fatherPhone": "father_phone",
    "motherName": "mother_name",
    "motherPhone": "mother_phone",
    "guardianName": "guardian_name",
    "guardianPhone": "guardian_phone",
    "relationOfGuardian": "relation_of_guardian",
    "currentAddress": "current_address",
    "permanentAddress": "permanent_address",
    "admissionDate": "admission_date",
}

DATE_COLUMNS = {"dob", "admission_date"}


def list_students(db: Session, filters: dict) -> list[User]:
    """Return every student matching the filters, ordered by id."""
    query = (
        db.query(User)
        .outerjoin(Student, Student.user_id == User.id)
        .options(joinedload(User.student))
        .filter(User.role_id == STUDENT_ROLE_ID)
    )
    if filters.get("name"):
        query = query.filter(User.name.ilike(f"%{filters['name']}%"))
    if filters.get("class"):
        query = query.filter(Student.class_name == filters["class"])
    if filters.get("section"):
        query = query.filter(Student.section_name == filters["section"])
    if filters.get("roll") is not None:
        query = query.filter(Student.roll == filters["roll"])

    return query.order_by(User.id).all()


def get_student_by_id(db: Session, student_id: int) -> User:
    return _get_student_user(db, student_id)


def create_student(db: Session, payload: dict) -> dict:
    _expect_operation(payload, "add")
    _check_role(payload)
    if _find_by_email(db, payload["email"]) is not None:
        raise ApiError(409, "Email already exists")

    user = User(reporter_id=payload["reporterId"], is_active=True)
    _apply(user, USER_COLUMNS, payload)
    user.student = Student()
    _apply(user.student, STUDENT_COLUMNS, payload)

    db.add(user)
    _commit(db)
    logger.info(f"Student created: user_id={user.id} by reporter={payload['reporterId']}")
    return {"message": "Student added successfully"}


def update_student(db: Session, payload: dict) -> dict:
    _expect_operation(payload, "update")
    _check_role(payload)
    user = _get_student_user(db, payload["userId"])

    existing = _find_by_email(db, payload["email"])
    if existing is not None and existing.id != user.id:
        raise ApiError(409, "Email already exists")

    _apply(user, USER_COLUMNS, payload)
    if user.student is None:
        user.student = Student()
    _apply(user.student, STUDENT_COLUMNS, payload)
    user.last_updated_by = payload["reporterId"]

    _commit(db)
    logger.info(f"Student updated: user_id={user.id} by reporter={payload['reporterId']}")
    return {"message": "Student updated successfully"}


def set_student_status(db: Session, payload: dict) -> dict:
    user = _get_student_user(db, payload["userId"])
    user.is_active = payload["status"]
    user.status_reviewer_id = payload["reviewerId"]
    user.status_changed_at = datetime.now(timezone.utc)

    _commit(db)
    logger.info(
        f"Student status changed: user_id={user.id} active={user.is_active} "
        f"by reviewer={payload['reviewerId']}"
    )
    return {"message": "Student status updated successfully"}


def delete_student(db: Session, student_id: int) -> dict:
    user = _get_student_user(db, student_id)
    db.delete(user)
    _commit(db)
    logger.info(f"Student deleted: user_id={student_id}")
    return {"message": "Student deleted successfully"}


def _get_student_user(db: Session, student_id: int) -> User:
    user = (
        db.query(User)
        .options(joinedload(User.student))
        .filter(User.id == student_id, User.role_id == STUDENT_ROLE_ID)
        .first()
    )
    if user is None:
        raise ApiError(404, "Student not found")
    return user


def _find_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(func.lower(User.email) == email.lower()).first()


def _apply(target, columns: dict, payload: dict) -> None:
    """Copy present payload keys onto ORM columns; absent keys leave columns untouched."""
    for key, column in columns.items():
        if key not in payload:
            continue
        value = payload[key]
        if column in DATE_COLUMNS and isinstance(value, str):
            value = date.fromisoformat(value)
        setattr(target, column, value)


def _check_role(payload: dict) -> None:
    if payload.get("roleId") != STUDENT_ROLE_ID:
        raise ApiError(400, "Invalid role for student record")


def _expect_operation(payload: dict, operation_type: str) -> None:
    if payload.get("operationType") != operation_type:
        raise ValueError(
            f"Expected operationType={operation_type!r}, got {payload.get('operationType')!r}"
        )


def _commit(db: Session) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
