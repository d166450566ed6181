from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel
from src.core.auth import Role

ALL_ROLES = "all"


class UserStatus(str, enum.Enum):
    """User account status."""

    ACTIVE = "active"
    PENDING_APPROVAL = "pending_approval"
    SUSPENDED = "suspended"


class LogbookStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class DocumentType(str, enum.Enum):
    MOA = "moa"
    WAIVER = "waiver"
    EVALUATION = "evaluation"
    CERTIFICATE = "certificate"
    OTHER = "other"


class DocumentStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class AnnouncementPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class EvaluatorRole(str, enum.Enum):
    COORDINATOR = "coordinator"
    SUPERVISOR = "supervisor"


class EvaluationType(str, enum.Enum):
    MIDTERM = "midterm"
    FINAL = "final"
    MONTHLY = "monthly"


class EvaluationStatus(str, enum.Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"


class ContactStatus(str, enum.Enum):
    NEW = "new"
    READ = "read"
    RESPONDED = "responded"
    CLOSED = "closed"


class Record(BaseModel):
    """Base for persisted records.

    Records are frozen; repositories replace them wholesale on mutation.
    Field names are snake_case in Python and camelCase in the stored JSON.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    # Aliases of fields assigned by the repository and never overwritten by updates.
    server_fields: ClassVar[tuple[str, ...]] = ("id",)
    # Aliases written only by the review operations, never by create or update.
    review_fields: ClassVar[tuple[str, ...]] = ()

    id: str

    @field_validator("*", mode="after")
    @classmethod
    def _assume_utc(cls, value: Any) -> Any:
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    def to_storage(self) -> dict[str, Any]:
        """JSON-ready dict keyed by the stored (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def storage_keys(cls, updates: dict[str, Any]) -> dict[str, Any]:
        """Translate snake_case update keys to their stored aliases."""
        translated: dict[str, Any] = {}
        for key, value in updates.items():
            field = cls.model_fields.get(key)
            translated[(field.alias or key) if field else key] = value
        return translated


class User(Record):
    server_fields: ClassVar[tuple[str, ...]] = ("id", "registrationDate")

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    role: Role
    phone: str | None = None
    company: str | None = None
    student_id: str | None = None
    department: str | None = None
    message: str | None = None
    registration_date: datetime
    status: UserStatus = UserStatus.ACTIVE
    last_login: datetime | None = None
    profile_image: str | None = None

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        return value.strip().lower()


class LogbookEntry(Record):
    server_fields: ClassVar[tuple[str, ...]] = ("id", "createdAt")
    review_fields: ClassVar[tuple[str, ...]] = ("feedback", "reviewedBy")

    user_id: str
    date: datetime
    title: str
    description: str = ""
    activities: list[str] = Field(default_factory=list)
    hours_worked: int = Field(ge=0)
    attachments: list[str] = Field(default_factory=list)
    status: LogbookStatus = LogbookStatus.SUBMITTED
    feedback: str | None = None
    reviewed_by: str | None = None
    created_at: datetime
    updated_at: datetime


class Document(Record):
    server_fields: ClassVar[tuple[str, ...]] = ("id", "uploadDate")
    review_fields: ClassVar[tuple[str, ...]] = ("status", "approvedBy", "approvalDate")

    user_id: str
    type: DocumentType
    title: str
    file_name: str
    file_url: str = "#"
    upload_date: datetime
    status: DocumentStatus = DocumentStatus.PENDING
    approved_by: str | None = None
    approval_date: datetime | None = None
    comments: str | None = None


class Announcement(Record):
    server_fields: ClassVar[tuple[str, ...]] = ("id", "createdAt")

    title: str
    content: str
    author_id: str
    author_name: str
    target_roles: list[str] = Field(default_factory=lambda: [ALL_ROLES])
    priority: AnnouncementPriority = AnnouncementPriority.MEDIUM
    created_at: datetime
    updated_at: datetime
    is_active: bool = True
    attachments: list[str] = Field(default_factory=list)

    @field_validator("target_roles")
    @classmethod
    def _known_roles(cls, value: list[str]) -> list[str]:
        unknown = [role for role in value if role != ALL_ROLES and not Role.contains(role)]
        if unknown:
            raise ValueError(f"Unknown target role(s): {', '.join(unknown)}")
        return value

    def is_visible_to(self, role: str) -> bool:
        return self.is_active and (role in self.target_roles or ALL_ROLES in self.target_roles)


class EvaluationScores(BaseModel):
    """Five rubric scores; ``overall`` is always derived from them."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    technical: int = Field(ge=0, le=100)
    communication: int = Field(ge=0, le=100)
    teamwork: int = Field(ge=0, le=100)
    initiative: int = Field(ge=0, le=100)
    punctuality: int = Field(ge=0, le=100)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overall(self) -> int:
        total = (
            self.technical + self.communication + self.teamwork + self.initiative + self.punctuality
        )
        # mean of five, rounded half up
        return (2 * total + 5) // 10


class Evaluation(Record):
    server_fields: ClassVar[tuple[str, ...]] = ("id", "dateEvaluated")

    student_id: str
    evaluator_id: str
    evaluator_role: EvaluatorRole
    type: EvaluationType
    scores: EvaluationScores
    comments: str = ""
    recommendations: str = ""
    date_evaluated: datetime
    status: EvaluationStatus = EvaluationStatus.DRAFT


class ContactSubmission(Record):
    server_fields: ClassVar[tuple[str, ...]] = ("id", "timestamp")

    name: str
    email: str
    subject: str
    message: str
    timestamp: datetime
    status: ContactStatus = ContactStatus.NEW
    response: str | None = None
    responded_by: str | None = None
    responded_at: datetime | None = None


class Snapshot(BaseModel):
    """Read-only derived payloads, serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class SystemStatistics(Snapshot):
    total_users: int
    active_students: int
    total_coordinators: int
    total_supervisors: int
    total_logbook_entries: int
    pending_documents: int
    completed_evaluations: int
    registrations_this_month: int


class LogbookProgress(Snapshot):
    total: int
    approved: int
    pending: int
    rejected: int


class DocumentProgress(Snapshot):
    required: int
    submitted: int
    pending: int


class EvaluationProgress(Snapshot):
    total: int
    completed: int


class StudentProgress(Snapshot):
    total_hours: int
    required_hours: int
    completion_percentage: int
    logbook_entries: LogbookProgress
    documents: DocumentProgress
    evaluations: EvaluationProgress
    last_activity: datetime | None = None


@dataclass(frozen=True, slots=True)
class SessionContext:
    """The signed-in actor, held explicitly by the caller."""

    user_id: str
    name: str
    email: str
    role: Role
    status: UserStatus = UserStatus.ACTIVE

    @classmethod
    def from_user(cls, user: User) -> SessionContext:
        return cls(
            user_id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
        )

    def has_role(self, *roles: Role | str) -> bool:
        return self.role.value in {Role(role).value for role in roles}
