"""
Authentication Utility - session-based principal lookup.

Provides:
- get_store: the request's PortalStore
- FastAPI dependencies for session-gated routes
- LoginRequired, raised when a route needs a principal the session lacks
"""

from typing import Optional

from fastapi import Depends, HTTPException, Request, Response, status

from placement_portal.schemas.schemas import PrincipalKind
from placement_portal.services.mongo_service import PortalStore

LOGIN_PATHS = {
    PrincipalKind.student: "/student/login",
    PrincipalKind.teacher: "/teacher/login",
}

DASHBOARD_PATHS = {
    PrincipalKind.student: "/student/dashboard",
    PrincipalKind.teacher: "/teacher/dashboard",
}


class LoginRequired(Exception):
    """The session holds no principal of the kind a route needs."""

    def __init__(self, location: str):
        super().__init__(location)
        self.location = location


def get_store(request: Request) -> PortalStore:
    return request.app.state.store


def no_store(response: Response) -> None:
    """Dependency - responses are principal-specific, keep them out of caches."""
    response.headers["Cache-Control"] = "no-store"


def session_principal(request: Request) -> Optional[PrincipalKind]:
    """Which kind of principal the session refers to, if any. Teachers win."""
    if request.session.get(PrincipalKind.teacher.session_key):
        return PrincipalKind.teacher
    if request.session.get(PrincipalKind.student.session_key):
        return PrincipalKind.student
    return None


def load_principal(request: Request, store: PortalStore, kind: PrincipalKind) -> dict:
    principal_id = request.session.get(kind.session_key)
    if not principal_id:
        raise LoginRequired(LOGIN_PATHS[kind])

    principal = store.principals(kind).get_by_id(principal_id)
    if principal is None:
        # session outlived the record it points to
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{kind.value.capitalize()} not found"
        )
    return principal


def get_current_student(request: Request, store: PortalStore = Depends(get_store)) -> dict:
    """
    FastAPI dependency - Get the logged-in student.

    Usage:
        @router.get("/student/dashboard")
        def route(student: dict = Depends(get_current_student)):
            return student
    """
    return load_principal(request, store, PrincipalKind.student)


def get_current_teacher(request: Request, store: PortalStore = Depends(get_store)) -> dict:
    """FastAPI dependency - Get the logged-in teacher."""
    return load_principal(request, store, PrincipalKind.teacher)
