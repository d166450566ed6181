from fastapi import FastAPI

from . import announcements, auth, contact, documents, evaluations, health, logbook, stats, users


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the FastAPI application."""
    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(users.router)
    app.include_router(logbook.router)
    app.include_router(documents.router)
    app.include_router(announcements.router)
    app.include_router(evaluations.router)
    app.include_router(contact.router)
    app.include_router(stats.router)
