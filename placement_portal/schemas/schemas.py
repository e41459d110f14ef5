"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Field aliases are the camelCase names stored in MongoDB and submitted
by the portal's forms; responses are serialized with the same names.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email
from typing import Optional, List
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class PrincipalKind(str, Enum):
    student = "student"
    teacher = "teacher"

    @property
    def session_key(self) -> str:
        """Session field holding this kind's principal id."""
        return f"{self.value}_id"


class DocumentModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def checked_email(value: str) -> str:
    """
    Reject malformed addresses but keep the one given as-is.

    Login matches the stored email exactly, so registration must not
    store a normalized form the user never typed.
    """
    validate_email(value)
    return value


# ============================================================
# AUTH SCHEMAS
# ============================================================

class LoginRequest(BaseModel):
    email: str
    password: str


class StudentRegister(DocumentModel):
    roll: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    password: str = Field(..., min_length=1)
    age: Optional[int] = Field(None, ge=0, le=150)
    college: Optional[str] = None
    placement_status: Optional[str] = Field(None, alias="placementStatus")
    graduation: Optional[float] = Field(None, ge=0, le=10)
    pgraduation: Optional[float] = Field(None, ge=0, le=10)
    experience: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    place_of_birth: Optional[str] = Field(None, alias="placeOfBirth")
    tenth_percentage: Optional[float] = Field(None, ge=0, le=100, alias="tenthPercentage")
    twelfth_percentage: Optional[float] = Field(None, ge=0, le=100, alias="twelfthPercentage")

    @field_validator("email")
    @classmethod
    def email_syntax(cls, value):
        return checked_email(value)

    @field_validator("roll", mode="before")
    @classmethod
    def roll_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value

    def to_document(self) -> dict:
        """Profile fields in stored form, password left out."""
        return self.model_dump(by_alias=True, exclude={"password"})


class TeacherRegister(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def email_syntax(cls, value):
        return checked_email(value)

    def to_document(self) -> dict:
        return self.model_dump(exclude={"password"})


# ============================================================
# PRINCIPAL SCHEMAS
# ============================================================

class StudentResponse(DocumentModel):
    id: str = Field(..., alias="_id")
    roll: Optional[str] = None
    name: Optional[str] = None
    email: str
    age: Optional[int] = None
    college: Optional[str] = None
    placement_status: Optional[str] = Field(None, alias="placementStatus")
    graduation: Optional[float] = None
    pgraduation: Optional[float] = None
    experience: Optional[str] = None
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    place_of_birth: Optional[str] = Field(None, alias="placeOfBirth")
    tenth_percentage: Optional[float] = Field(None, alias="tenthPercentage")
    twelfth_percentage: Optional[float] = Field(None, alias="twelfthPercentage")

    @field_validator("roll", mode="before")
    @classmethod
    def roll_as_text(cls, value):
        if isinstance(value, int):
            return str(value)
        return value


class TeacherResponse(DocumentModel):
    id: str = Field(..., alias="_id")
    name: Optional[str] = None
    email: str


class StudentView(BaseModel):
    view: str
    student: StudentResponse


class TeacherView(BaseModel):
    view: str
    teacher: TeacherResponse


class StudentListView(BaseModel):
    view: str
    students: List[StudentResponse]
    total: int


# ============================================================
# PLACEMENT SCHEMAS
# ============================================================

class PlacementCreate(DocumentModel):
    company_name: Optional[str] = Field(None, alias="companyName")
    job_profile: Optional[str] = Field(None, alias="jobProfile")
    description: Optional[str] = None
    location: Optional[str] = None
    date: Optional[str] = None

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class PlacementResponse(PlacementCreate):
    id: str = Field(..., alias="_id")

    @field_validator("date", mode="before")
    @classmethod
    def date_as_text(cls, value):
        # older drives were saved with a BSON date
        if isinstance(value, datetime):
            return value.date().isoformat()
        return value


class PlacementListResponse(BaseModel):
    view: str
    placements: List[PlacementResponse]
    total: int


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class ViewResponse(BaseModel):
    view: str
    success: Optional[bool] = None


class MessageResponse(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    detail: str
