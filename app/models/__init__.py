from app.models.user import User, STUDENT_ROLE_ID
from app.models.student import Student

__all__ = [
    "User",
    "Student",
    "STUDENT_ROLE_ID",
]
