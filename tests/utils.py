from __future__ import annotations

from src.core.auth import Role, create_access_token

# Canonical seed accounts by role.
SEED_ADMIN = ("1", Role.ADMIN, "admin@msu.edu.ph")
SEED_STUDENT = ("2", Role.STUDENT, "john.doe@student.msu.edu.ph")
SEED_COORDINATOR = ("3", Role.COORDINATOR, "jane.smith@msu.edu.ph")
SEED_SUPERVISOR = ("4", Role.SUPERVISOR, "bob.wilson@company.com")
SEED_OTHER_STUDENT = ("5", Role.STUDENT, "alice.johnson@student.msu.edu.ph")


def auth_headers(user_id: str = "2", role: Role = Role.STUDENT, email: str | None = None) -> dict:
    token = create_access_token(user_id, role=role.value, name="Test User", email=email)
    return {"Authorization": f"Bearer {token}"}


def headers_for(account: tuple[str, Role, str]) -> dict:
    user_id, role, email = account
    return auth_headers(user_id, role, email)


def user_payload(email: str, role: Role = Role.STUDENT, **extra) -> dict:
    return {"name": email.split("@")[0].title(), "email": email, "role": role, **extra}
