"""
Authentication Routes

GET  /student/register - Student registration form
POST /student/register - Register a student (bcrypt-hashed password)
GET  /student/login    - Student login form
POST /student/login    - Log a student in
GET  /teacher/register - Teacher registration form
POST /teacher/register - Register a teacher
GET  /teacher/login    - Teacher login form
POST /teacher/login    - Log a teacher in
GET  /logout           - End the session
GET  /teacher/logout   - End the session (teacher pages link here)
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import RedirectResponse
from pymongo.errors import DuplicateKeyError
from starlette.concurrency import run_in_threadpool

from placement_portal.core.auth import DASHBOARD_PATHS, get_store
from placement_portal.core.forms import submitted
from placement_portal.core.sessions import destroy_session, rotate_session
from placement_portal.services.mongo_service import PortalStore
from placement_portal.schemas.schemas import (
    LoginRequest, MessageResponse, PrincipalKind, StudentRegister, TeacherRegister, ViewResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


def see_other(url: str) -> RedirectResponse:
    """Redirect a form POST to a page the browser should GET."""
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)


# ============================================================
# STUDENTS
# ============================================================

@router.get("/student/register", response_model=ViewResponse)
def student_register_form(success: Optional[bool] = None):
    return ViewResponse(view="student_register", success=success)


@router.post("/student/register", response_class=RedirectResponse, status_code=303)
async def register_student(
    data: StudentRegister = Depends(submitted(StudentRegister)),
    store: PortalStore = Depends(get_store)
):
    """
    Register a student.

    A duplicate email (student or teacher) sends the browser back to the
    form with success=false; otherwise on to the login page.
    """
    if await run_in_threadpool(store.email_registered, data.email):
        logger.info("Student registration rejected, email in use: %s", data.email)
        return see_other("/student/register?success=false")

    try:
        student_id = await store.students.register(data.to_document(), data.password)
    except DuplicateKeyError:
        logger.info("Student registration lost race for email: %s", data.email)
        return see_other("/student/register?success=false")

    logger.info("Registered student %s", student_id)
    return see_other("/student/login?success=true")


@router.get("/student/login", response_model=ViewResponse)
def student_login_form(success: Optional[bool] = None):
    return ViewResponse(view="student_login", success=success)


@router.post("/student/login", response_class=RedirectResponse, status_code=303)
async def login_student(
    request: Request,
    credentials: LoginRequest = Depends(submitted(LoginRequest)),
    store: PortalStore = Depends(get_store)
):
    """Log a student in and send them to their dashboard."""
    return await login(request, store, PrincipalKind.student, credentials)


# ============================================================
# TEACHERS
# ============================================================

@router.get("/teacher/register", response_model=ViewResponse)
def teacher_register_form():
    return ViewResponse(view="teacher_register")


@router.post("/teacher/register", response_model=MessageResponse, status_code=201)
async def register_teacher(
    data: TeacherRegister = Depends(submitted(TeacherRegister)),
    store: PortalStore = Depends(get_store)
):
    """
    Register a teacher.

    The password is stored as submitted unless hash_teacher_passwords
    is enabled.
    """
    if await run_in_threadpool(store.email_registered, data.email):
        raise HTTPException(status_code=400, detail="email already exists")

    try:
        teacher_id = await store.teachers.register(data.to_document(), data.password)
    except DuplicateKeyError:
        raise HTTPException(status_code=400, detail="email already exists")

    logger.info("Registered teacher %s", teacher_id)
    return MessageResponse(message="Teacher registered successfully")


@router.get("/teacher/login", response_model=ViewResponse)
def teacher_login_form():
    return ViewResponse(view="teacher_login")


@router.post("/teacher/login", response_class=RedirectResponse, status_code=303)
async def login_teacher(
    request: Request,
    credentials: LoginRequest = Depends(submitted(LoginRequest)),
    store: PortalStore = Depends(get_store)
):
    """Log a teacher in and send them to their dashboard."""
    return await login(request, store, PrincipalKind.teacher, credentials)


# ============================================================
# SHARED
# ============================================================

async def login(
    request: Request,
    store: PortalStore,
    kind: PrincipalKind,
    credentials: LoginRequest
) -> RedirectResponse:
    principal = await store.principals(kind).authenticate(credentials.email, credentials.password)
    if principal is None:
        logger.info("Failed %s login for %s", kind.value, credentials.email)
        raise HTTPException(status_code=400, detail="Invalid email or password")

    # fresh session id, holding one principal
    await rotate_session(request, store.sessions)
    request.session[kind.session_key] = principal["_id"]
    logger.info("%s %s logged in", kind.value.capitalize(), principal["_id"])
    return see_other(DASHBOARD_PATHS[kind])


@router.get("/logout", response_class=RedirectResponse)
async def logout(request: Request, store: PortalStore = Depends(get_store)):
    await destroy_session(request, store.sessions)
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)


@router.get("/teacher/logout", response_class=RedirectResponse)
async def teacher_logout(request: Request, store: PortalStore = Depends(get_store)):
    await destroy_session(request, store.sessions)
    logger.info("Teacher logged out")
    return RedirectResponse("/", status_code=status.HTTP_302_FOUND)
