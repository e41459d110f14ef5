"""
Teacher Routes

GET /teacher/dashboard   - Logged-in teacher's dashboard
GET /add-placement-drive - Form for posting a placement drive
GET /view_student        - Every registered student
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_teacher, get_store, no_store
from placement_portal.services.mongo_service import PortalStore
from placement_portal.schemas.schemas import (
    StudentListView, StudentResponse, TeacherResponse, TeacherView, ViewResponse
)

router = APIRouter(tags=["Teachers"])


@router.get("/teacher/dashboard", response_model=TeacherView, dependencies=[Depends(no_store)])
def teacher_dashboard(teacher: dict = Depends(get_current_teacher)):
    """Dashboard for the logged-in teacher. Redirects to login without a session."""
    return TeacherView(view="teacher_dashboard", teacher=TeacherResponse.model_validate(teacher))


@router.get("/add-placement-drive", response_model=ViewResponse, dependencies=[Depends(no_store)])
def add_placement_drive_form(teacher: dict = Depends(get_current_teacher)):
    return ViewResponse(view="add_placement_drive")


@router.get("/view_student", response_model=StudentListView, dependencies=[Depends(no_store)])
def view_students(
    teacher: dict = Depends(get_current_teacher),
    store: PortalStore = Depends(get_store)
):
    """All students, passwords excluded."""
    students = [StudentResponse.model_validate(doc) for doc in store.students.list_all()]
    return StudentListView(view="view_student", students=students, total=len(students))
