"""
Student Routes

GET /student/dashboard - Logged-in student's dashboard
GET /student/update    - Logged-in student's data for the update form
GET /dashboard         - Bare student dashboard view (no session check)
"""

from fastapi import APIRouter, Depends

from placement_portal.core.auth import get_current_student, no_store
from placement_portal.schemas.schemas import StudentResponse, StudentView, ViewResponse

router = APIRouter(tags=["Students"])


@router.get("/student/dashboard", response_model=StudentView, dependencies=[Depends(no_store)])
def student_dashboard(student: dict = Depends(get_current_student)):
    """Dashboard for the logged-in student. Redirects to login without a session."""
    return StudentView(view="student_dashboard", student=StudentResponse.model_validate(student))


@router.get("/student/update", response_model=StudentView, dependencies=[Depends(no_store)])
def student_update_form(student: dict = Depends(get_current_student)):
    """Current registration data, to prefill the update form."""
    return StudentView(
        view="update_registration_form",
        student=StudentResponse.model_validate(student)
    )


@router.get("/dashboard", response_model=ViewResponse)
def dashboard():
    return ViewResponse(view="student_dashboard")
