from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from src.core.auth import Role
from src.domain.models import (
    Announcement,
    AnnouncementPriority,
    Document,
    DocumentStatus,
    DocumentType,
    Evaluation,
    EvaluationScores,
    EvaluationStatus,
    EvaluationType,
    EvaluatorRole,
    LogbookEntry,
    LogbookStatus,
    User,
    UserStatus,
)


@dataclass(frozen=True, slots=True)
class SeedDataset:
    users: list[User]
    announcements: list[Announcement]
    logbook_entries: list[LogbookEntry]
    documents: list[Document]
    evaluations: list[Evaluation]


def _user(user_id: str, name: str, email: str, role: Role, now: datetime, **extra) -> User:
    return User(
        id=user_id,
        name=name,
        email=email,
        role=role,
        registration_date=now,
        status=UserStatus.ACTIVE,
        **extra,
    )


def build_seed_dataset(now: datetime) -> SeedDataset:
    """Canonical first-run data; relative dates are computed from ``now``."""

    def days_ago(days: int) -> datetime:
        return now - timedelta(days=days)

    users = [
        _user("1", "Admin User", "admin@msu.edu.ph", Role.ADMIN, now),
        _user("0", "System Admin", "adminxx@minsu.com", Role.ADMIN, now),
        _user(
            "2",
            "John Doe",
            "john.doe@student.msu.edu.ph",
            Role.STUDENT,
            now,
            student_id="2021-12345",
            department="Computer Science",
        ),
        _user(
            "3",
            "Jane Smith",
            "jane.smith@msu.edu.ph",
            Role.COORDINATOR,
            now,
            department="Computer Science",
        ),
        _user(
            "4",
            "Bob Wilson",
            "bob.wilson@company.com",
            Role.SUPERVISOR,
            now,
            company="Tech Solutions Inc.",
        ),
        _user(
            "5",
            "Alice Johnson",
            "alice.johnson@student.msu.edu.ph",
            Role.STUDENT,
            now,
            student_id="2021-67890",
            department="Computer Science",
        ),
        _user(
            "6",
            "Mark Davis",
            "mark.davis@company2.com",
            Role.SUPERVISOR,
            now,
            company="Digital Innovations Corp",
        ),
    ]

    announcements = [
        Announcement(
            id="1",
            title="OJT Orientation Schedule",
            content=(
                "All students must attend the orientation on January 25, 2024 at 10:00 AM "
                "via Zoom. Meeting ID will be sent via email."
            ),
            author_id="3",
            author_name="Jane Smith",
            target_roles=[Role.STUDENT.value],
            priority=AnnouncementPriority.HIGH,
            created_at=days_ago(2),
            updated_at=days_ago(2),
        ),
        Announcement(
            id="2",
            title="MOA Submission Deadline",
            content=(
                "Please submit your signed Memorandum of Agreement by February 1, 2024. "
                "Late submissions will not be accepted."
            ),
            author_id="3",
            author_name="Jane Smith",
            target_roles=[Role.STUDENT.value],
            priority=AnnouncementPriority.URGENT,
            created_at=days_ago(1),
            updated_at=days_ago(1),
        ),
        Announcement(
            id="3",
            title="System Maintenance Notice",
            content=(
                "The OJT system will undergo maintenance on January 30, 2024 from 2:00 AM "
                "to 4:00 AM. Please plan accordingly."
            ),
            author_id="1",
            author_name="Admin User",
            target_roles=["all"],
            priority=AnnouncementPriority.MEDIUM,
            created_at=now,
            updated_at=now,
        ),
    ]

    logbook_entries = [
        LogbookEntry(
            id="1",
            user_id="2",
            date=days_ago(3),
            title="Database Design and Implementation",
            description=(
                "Worked on designing the database schema for the inventory management "
                "system. Created ERD diagrams and implemented the initial tables using "
                "MySQL. Learned about normalization and foreign key relationships."
            ),
            activities=["Database design", "ERD creation", "MySQL implementation"],
            hours_worked=8,
            status=LogbookStatus.APPROVED,
            feedback="Excellent work on the database design. The ERD is well-structured.",
            created_at=days_ago(3),
            updated_at=days_ago(2),
        ),
        LogbookEntry(
            id="2",
            user_id="2",
            date=days_ago(2),
            title="Frontend Development with React",
            description=(
                "Developed user interface components for the inventory system using "
                "React.js. Implemented responsive design and integrated with the backend "
                "API. Created forms for data entry and validation."
            ),
            activities=["React development", "UI/UX design", "API integration"],
            hours_worked=8,
            status=LogbookStatus.APPROVED,
            feedback=(
                "Great progress on the frontend. The components are well-structured and "
                "responsive."
            ),
            created_at=days_ago(2),
            updated_at=days_ago(1),
        ),
        LogbookEntry(
            id="3",
            user_id="2",
            date=days_ago(1),
            title="API Development and Testing",
            description=(
                "Created RESTful API endpoints using Node.js and Express. Implemented CRUD "
                "operations for inventory items. Conducted unit testing and API "
                "documentation using Postman."
            ),
            activities=["API development", "Testing", "Documentation"],
            hours_worked=8,
            status=LogbookStatus.SUBMITTED,
            created_at=days_ago(1),
            updated_at=days_ago(1),
        ),
    ]

    documents = [
        Document(
            id="1",
            user_id="2",
            type=DocumentType.MOA,
            title="Memorandum of Agreement - Tech Solutions Inc.",
            file_name="MOA_TechSolutions_JohnDoe.pdf",
            upload_date=days_ago(5),
            status=DocumentStatus.APPROVED,
            approved_by="3",
            approval_date=days_ago(3),
            comments="MOA approved. All terms and conditions are acceptable.",
        ),
        Document(
            id="2",
            user_id="2",
            type=DocumentType.WAIVER,
            title="Liability Waiver Form",
            file_name="Waiver_JohnDoe.pdf",
            upload_date=days_ago(4),
            status=DocumentStatus.APPROVED,
            approved_by="3",
            approval_date=days_ago(2),
        ),
        Document(
            id="3",
            user_id="5",
            type=DocumentType.MOA,
            title="Memorandum of Agreement - Digital Innovations",
            file_name="MOA_DigitalInnovations_AliceJohnson.pdf",
            upload_date=days_ago(1),
            status=DocumentStatus.PENDING,
        ),
    ]

    evaluations = [
        Evaluation(
            id="1",
            student_id="2",
            evaluator_id="4",
            evaluator_role=EvaluatorRole.SUPERVISOR,
            type=EvaluationType.MIDTERM,
            scores=EvaluationScores(
                technical=85,
                communication=90,
                teamwork=88,
                initiative=87,
                punctuality=95,
            ),
            comments=(
                "John has shown excellent technical skills and great communication with the "
                "team. He takes initiative and is always punctual."
            ),
            recommendations=(
                "Continue with current performance. Consider assigning more complex tasks "
                "to further develop technical skills."
            ),
            date_evaluated=days_ago(7),
            status=EvaluationStatus.APPROVED,
        ),
    ]

    return SeedDataset(
        users=users,
        announcements=announcements,
        logbook_entries=logbook_entries,
        documents=documents,
        evaluations=evaluations,
    )
