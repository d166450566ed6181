"""Request bodies for the record endpoints.

Server-assigned fields (ids, timestamps, review stamps) are not accepted here;
the repositories set them.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import EmailStr, Field, field_validator
from src.core.auth import Role
from src.domain.models import (
    AnnouncementPriority,
    ContactStatus,
    DocumentType,
    EvaluationStatus,
    EvaluationType,
    LogbookStatus,
    UserStatus,
)

from . import ApiModel


def _editable_status(value: LogbookStatus) -> LogbookStatus:
    if value not in (LogbookStatus.DRAFT, LogbookStatus.SUBMITTED):
        raise ValueError("status must be draft or submitted")
    return value


class UserCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=128)
    email: EmailStr
    role: Role
    status: UserStatus = UserStatus.ACTIVE
    student_id: str | None = None
    company: str | None = None
    department: str | None = None
    phone: str | None = None


class UserUpdate(ApiModel):
    name: str | None = Field(None, min_length=1, max_length=128)
    email: EmailStr | None = None
    student_id: str | None = None
    company: str | None = None
    department: str | None = None
    phone: str | None = None
    profile_image: str | None = None


class LogbookCreate(ApiModel):
    date: datetime
    title: str = Field(..., min_length=1)
    description: str = ""
    activities: list[str] = Field(default_factory=list)
    hours_worked: int = Field(..., ge=0)
    attachments: list[str] = Field(default_factory=list)
    status: LogbookStatus = LogbookStatus.SUBMITTED

    @field_validator("status")
    @classmethod
    def _draft_or_submitted(cls, value: LogbookStatus) -> LogbookStatus:
        return _editable_status(value)


class LogbookUpdate(ApiModel):
    date: datetime | None = None
    title: str | None = Field(None, min_length=1)
    description: str | None = None
    activities: list[str] | None = None
    hours_worked: int | None = Field(None, ge=0)
    attachments: list[str] | None = None
    status: LogbookStatus | None = None

    @field_validator("status")
    @classmethod
    def _draft_or_submitted(cls, value: LogbookStatus | None) -> LogbookStatus | None:
        return value if value is None else _editable_status(value)


class LogbookReview(ApiModel):
    status: LogbookStatus
    feedback: str | None = None


class BulkApproveRequest(ApiModel):
    entry_ids: list[str] = Field(..., min_length=1)


class DocumentUpload(ApiModel):
    type: DocumentType
    title: str = Field(..., min_length=1)
    file_name: str = Field(..., min_length=1)
    file_url: str = "#"


class DocumentReview(ApiModel):
    comments: str | None = None


class AnnouncementCreate(ApiModel):
    title: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    target_roles: list[str] = Field(default_factory=lambda: ["all"])
    priority: AnnouncementPriority = AnnouncementPriority.MEDIUM
    attachments: list[str] = Field(default_factory=list)


class AnnouncementUpdate(ApiModel):
    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    target_roles: list[str] | None = None
    priority: AnnouncementPriority | None = None
    is_active: bool | None = None


class ScoresPayload(ApiModel):
    technical: int = Field(..., ge=0, le=100)
    communication: int = Field(..., ge=0, le=100)
    teamwork: int = Field(..., ge=0, le=100)
    initiative: int = Field(..., ge=0, le=100)
    punctuality: int = Field(..., ge=0, le=100)


class EvaluationCreate(ApiModel):
    student_id: str
    type: EvaluationType
    scores: ScoresPayload
    comments: str = ""
    recommendations: str = ""
    status: EvaluationStatus = EvaluationStatus.SUBMITTED


class EvaluationUpdate(ApiModel):
    scores: ScoresPayload | None = None
    comments: str | None = None
    recommendations: str | None = None
    status: EvaluationStatus | None = None


class ContactCreate(ApiModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)


class ContactStatusUpdate(ApiModel):
    status: ContactStatus


class ContactResponseRequest(ApiModel):
    response: str = Field(..., min_length=1)
