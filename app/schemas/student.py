"""Request and response schemas for the students endpoints.

Each endpoint has one request model whose ``query``, ``params`` and ``body``
fields describe the matching part of the HTTP request. Wire names are
camelCase; error locations use the wire names. Response models read ORM
objects and serialize with the same camelCase names.
"""

import re
from datetime import date, datetime
from typing import Annotated, Literal, Optional

from pydantic import (
    AfterValidator,
    AliasChoices,
    AliasGenerator,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    ValidationError,
    WrapValidator,
    model_validator,
)
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

PHONE_PATTERN = re.compile(r"\+?[1-9]\d{6,14}", re.ASCII)  # 7 to 15 digits
DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)
_DIGITS = re.compile(r"\d{1,10}", re.ASCII)
_LEADING_INT = re.compile(r"\s*([+-]?\d{1,10})", re.ASCII)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

# Largest value an INTEGER column holds on every supported database
MAX_INTEGER = 2**31 - 1


# ── Reusable field constraints ──────────────────────────────────

def _max_length(limit: int, message: str, min_length: int = 0):
    def check(value: str) -> str:
        if len(value) > limit:
            raise PydanticCustomError("string_too_long", message)
        if len(value) < min_length:
            raise PydanticCustomError("string_too_short", message)
        return value
    return AfterValidator(check)


def _phone(message: str):
    def check(value: str) -> str:
        if not PHONE_PATTERN.fullmatch(value):
            raise PydanticCustomError("phone_format", message)
        return value
    return AfterValidator(check)


def _iso_date(message: str):
    def check(value: str) -> str:
        if not DATE_PATTERN.fullmatch(value):
            raise PydanticCustomError("date_format", message)
        try:
            date.fromisoformat(value)
        except ValueError:
            raise PydanticCustomError("date_format", message)
        return value
    return AfterValidator(check)


def _positive_int(message: str):
    """JSON integer in 1..MAX_INTEGER; strings and booleans are rejected."""
    def check(value):
        if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_INTEGER:
            raise PydanticCustomError("positive_int", message)
        return value
    return BeforeValidator(check)


def _coerced_positive_int(message: str, blank_is_none: bool = False):
    """Positive integer arriving as text (path or query string)."""
    def check(value):
        if blank_is_none:
            value = _trimmed_or_none(value)
            if value is None:
                return None
        if isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int) or not 0 < value <= MAX_INTEGER:
            raise PydanticCustomError("positive_int", message)
        return value
    return BeforeValidator(check)


def _strict_bool(message: str):
    def check(value):
        if not isinstance(value, bool):
            raise PydanticCustomError("bool_type", message)
        return value
    return BeforeValidator(check)


def _clamped_int(default: int, upper: Optional[int] = None):
    """Never fails: unparseable or zero falls back to the default, the rest is clamped."""
    def clamp(value) -> int:
        match = _LEADING_INT.match(str(value)) if value is not None else None
        number = int(match.group(1)) if match else 0
        if number == 0:
            return default
        number = max(1, number)
        return min(upper, number) if upper is not None else number
    return BeforeValidator(clamp)


def _trimmed_or_none(value):
    if isinstance(value, str):
        value = value.strip()
        return value or None
    return value


def _email_format(value, handler):
    try:
        return handler(value)
    except ValidationError:
        raise PydanticCustomError("email_format", "Invalid email format")


Email = Annotated[EmailStr, WrapValidator(_email_format), _max_length(100, "Email too long")]
Name = Annotated[str, _max_length(100, "Name too long")]
Phone = Annotated[str, _phone("Invalid phone number format")]
ClassLabel = Annotated[str, _max_length(50, "Must be between 1 and 50 characters", min_length=1)]
Address = Annotated[str, _max_length(500, "Address too long")]
StudentId = Annotated[int, _coerced_positive_int("Invalid student ID")]
ReporterId = Annotated[int, _positive_int("Reporter ID is required")]
ReviewerId = Annotated[int, _positive_int("Valid reviewer ID is required")]
Roll = Annotated[int, _positive_int("Roll number must be a positive integer")]
FilterText = Annotated[Optional[str], BeforeValidator(_trimmed_or_none)]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ── Request parts ───────────────────────────────────────────────

class StudentIdParams(CamelModel):
    id: StudentId


class ListStudentsQuery(CamelModel):
    name: FilterText = None
    class_name: FilterText = None
    section: FilterText = None
    roll: Annotated[
        Optional[int],
        _coerced_positive_int("Roll number must be a positive integer", blank_is_none=True),
    ] = None
    page: Annotated[int, _clamped_int(DEFAULT_PAGE)] = DEFAULT_PAGE
    limit: Annotated[int, _clamped_int(DEFAULT_LIMIT, MAX_LIMIT)] = DEFAULT_LIMIT


class BasicDetails(CamelModel):
    name: Name
    email: Email
    role_id: Optional[Literal[3]] = None

    @model_validator(mode="before")
    @classmethod
    def require_name_and_email(cls, data):
        if not isinstance(data, dict) or data.get("name") in (None, "") or data.get("email") in (None, ""):
            raise PydanticCustomError("missing", "Name and email are required")
        return data

    @model_validator(mode="after")
    def reject_blank_name(self):
        if not self.name.strip():
            raise PydanticCustomError("missing", "Name and email are required")
        return self


class AdditionalDetails(CamelModel):
    gender: Optional[Literal["Male", "Female", "Other"]] = None
    phone: Optional[Phone] = None
    dob: Optional[Annotated[str, _iso_date("Invalid date format (YYYY-MM-DD)")]] = None
    class_name: Optional[ClassLabel] = None
    section_name: Optional[ClassLabel] = None
    roll: Optional[Roll] = None
    father_name: Optional[Name] = None
    father_phone: Optional[Annotated[str, _phone("Invalid father phone number")]] = None
    mother_name: Optional[Name] = None
    mother_phone: Optional[Annotated[str, _phone("Invalid mother phone number")]] = None
    guardian_name: Optional[Name] = None
    guardian_phone: Optional[Annotated[str, _phone("Invalid guardian phone number")]] = None
    relation_of_guardian: Optional[Annotated[str, _max_length(50, "Relation too long")]] = None
    current_address: Optional[Address] = None
    permanent_address: Optional[Address] = None
    admission_date: Optional[
        Annotated[str, _iso_date("Invalid admission date format (YYYY-MM-DD)")]
    ] = None


class UpdateAdditionalDetails(AdditionalDetails):
    system_access: Optional[Annotated[bool, _strict_bool("System access must be a boolean value")]] = None


class RequestBody(CamelModel):
    """Body model whose required fields report their own message when absent."""

    @model_validator(mode="before")
    @classmethod
    def fill_absent_required(cls, data):
        # An absent required field is validated as null under its wire name,
        # so its validator raises the field's message at the camelCase path.
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for name, field in cls.model_fields.items():
            alias = field.alias or name
            if field.is_required() and alias not in data and name not in data:
                data[alias] = None
        return data


class AddStudentBody(RequestBody):
    operation_type: Optional[Literal["add"]] = None
    reporter_id: ReporterId
    basic_details: BasicDetails
    additional_details: Optional[AdditionalDetails] = None


class UpdateStudentBody(RequestBody):
    operation_type: Optional[Literal["update"]] = None
    reporter_id: ReporterId
    user_id: Optional[Annotated[int, _positive_int("User ID must be a positive integer")]] = None
    basic_details: BasicDetails
    additional_details: Optional[UpdateAdditionalDetails] = None


class StudentStatusBody(RequestBody):
    status: Annotated[bool, _strict_bool("Status must be a boolean value")]
    reviewer_id: ReviewerId


# ── Endpoint schemas ────────────────────────────────────────────

class ListStudentsRequest(BaseModel):
    query: ListStudentsQuery = Field(default_factory=ListStudentsQuery)


class AddStudentRequest(BaseModel):
    body: AddStudentBody


class StudentDetailRequest(BaseModel):
    params: StudentIdParams


class UpdateStudentRequest(BaseModel):
    params: StudentIdParams
    body: UpdateStudentBody


class StudentStatusRequest(BaseModel):
    params: StudentIdParams
    body: StudentStatusBody


class DeleteStudentRequest(BaseModel):
    params: StudentIdParams


# ── Responses ───────────────────────────────────────────────────

def _read_alias(name: str) -> AliasChoices:
    return AliasChoices(name, to_camel(name))


class ResponseModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=_read_alias, serialization_alias=to_camel),
        from_attributes=True,
    )


class StudentDetailsRecord(ResponseModel):
    gender: Optional[str] = None
    phone: Optional[str] = None
    dob: Optional[date] = None
    class_name: Optional[str] = None
    section_name: Optional[str] = None
    roll: Optional[int] = None
    father_name: Optional[str] = None
    father_phone: Optional[str] = None
    mother_name: Optional[str] = None
    mother_phone: Optional[str] = None
    guardian_name: Optional[str] = None
    guardian_phone: Optional[str] = None
    relation_of_guardian: Optional[str] = None
    current_address: Optional[str] = None
    permanent_address: Optional[str] = None
    admission_date: Optional[date] = None


class StudentRecord(ResponseModel):
    id: int
    name: str
    email: str
    role_id: int
    is_active: bool
    system_access: bool = Field(
        validation_alias=AliasChoices("has_system_access", "systemAccess"),
        serialization_alias="systemAccess",
    )
    reporter_id: Optional[int] = None
    additional_details: Optional[StudentDetailsRecord] = Field(
        default=None,
        validation_alias=AliasChoices("student", "additionalDetails"),
        serialization_alias="additionalDetails",
    )
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int


class StudentListResponse(BaseModel):
    success: bool = True
    data: list[StudentRecord]
    pagination: Pagination


class StudentDetailResponse(BaseModel):
    success: bool = True
    data: StudentRecord


class MessageResponse(BaseModel):
    success: bool = True
    message: str
