from app.schemas.student import (
    AddStudentRequest,
    DeleteStudentRequest,
    ListStudentsRequest,
    StudentDetailRequest,
    StudentStatusRequest,
    UpdateStudentRequest,
)

__all__ = [
    "ListStudentsRequest",
    "AddStudentRequest",
    "StudentDetailRequest",
    "UpdateStudentRequest",
    "StudentStatusRequest",
    "DeleteStudentRequest",
]
