"""Build persistence payloads from validated student requests.

The payload uses the names the persistence layer expects. Optional fields are
only set when the caller supplied them, so no key ever carries ``None``.
"""

import logging
import re
from typing import Optional

from app.core.errors import ApiError
from app.models.user import STUDENT_ROLE_ID
from app.schemas.student import (
    MAX_INTEGER,
    PHONE_PATTERN,
    AdditionalDetails,
    BasicDetails,
    ListStudentsQuery,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")

# additional-details attribute -> persistence key
ADDITIONAL_FIELD_MAP: dict[str, str] = {
    "gender": "gender",
    "phone": "phone",
    "dob": "dob",
    "class_name": "class",
    "section_name": "section",
    "roll": "roll",
    "father_name": "fatherName",
    "father_phone": "fatherPhone",
    "mother_name": "motherName",
    "mother_phone": "motherPhone",
    "guardian_name": "guardianName",
    "guardian_phone": "guardianPhone",
    "relation_of_guardian": "relationOfGuardian",
    "current_address": "currentAddress",
    "permanent_address": "permanentAddress",
    "admission_date": "admissionDate",
    "system_access": "systemAccess",
}

# list-query attribute -> persistence filter key
LIST_FILTER_MAP: dict[str, str] = {
    "name": "name",
    "class_name": "class",
    "section": "section",
    "roll": "roll",
}

PHONE_FIELDS = ("phone", "fatherPhone", "motherPhone", "guardianPhone")


def normalize_email(email: str) -> str:
    """Lower-case and trim an email, rejecting anything that is not address-shaped."""
    normalized = email.strip().lower()
    if not EMAIL_PATTERN.fullmatch(normalized):
        raise ApiError(400, "Invalid email format")
    return normalized


def build_student_payload(
    operation_type: str,
    reporter_id: int,
    basic_details: BasicDetails,
    additional_details: Optional[AdditionalDetails] = None,
    user_id: Optional[int] = None,
) -> dict:
    """
    Flatten a validated add/update request into a persistence payload.

    Args:
        operation_type: "add" or "update"
        reporter_id: User performing the change
        basic_details: Validated name/email block
        additional_details: Validated optional profile fields
        user_id: Student id; required for "update", never sent for "add"

    Returns:
        Payload dict keyed by persistence names

    Raises:
        ApiError: 400 when a field fails the pre-dispatch checks
    """
    if operation_type not in ("add", "update"):
        raise ValueError(f"Unknown operation type: {operation_type}")
    if operation_type == "update" and user_id is None:
        raise ApiError(400, "Invalid student ID")

    if basic_details is None or not basic_details.name or not basic_details.email:
        raise ApiError(400, "Name and email are required")
    name = basic_details.name.strip()
    if not name:
        raise ApiError(400, "Name and email are required")

    payload = {
        "operationType": operation_type,
        "reporterId": reporter_id,
        "name": name,
        "email": normalize_email(basic_details.email),
        "roleId": STUDENT_ROLE_ID,
    }
    if operation_type == "update":
        payload["userId"] = user_id

    if additional_details is not None:
        for attr, key in ADDITIONAL_FIELD_MAP.items():
            value = getattr(additional_details, attr, None)
            if value is not None:
                payload[key] = value

    _check_payload(payload)
    logger.debug(f"Built {operation_type} payload: {payload}")
    return payload


def _check_payload(payload: dict) -> None:
    """Re-check the fields the persistence layer cannot accept malformed."""
    for key in PHONE_FIELDS:
        value = payload.get(key)
        if value is not None and not PHONE_PATTERN.fullmatch(str(value)):
            raise ApiError(400, "Invalid phone number format")

    roll = payload.get("roll")
    if roll is not None and (isinstance(roll, bool) or not isinstance(roll, int) or not 0 < roll <= MAX_INTEGER):
        raise ApiError(400, "Roll number must be a positive integer")


def build_list_filter(query: ListStudentsQuery) -> dict:
    """Map parsed list-query filters to persistence filter keys, skipping absent ones."""
    return {
        key: getattr(query, attr)
        for attr, key in LIST_FILTER_MAP.items()
        if getattr(query, attr) is not None
    }
