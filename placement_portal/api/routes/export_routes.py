"""
Export Routes

GET /view_student/download - Download every student as students.xlsx
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import Response

from placement_portal.core.auth import get_store
from placement_portal.services.export_service import XLSX_MEDIA_TYPE, build_roster_workbook
from placement_portal.services.mongo_service import PortalStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Export"])


@router.get(
    "/view_student/download",
    response_class=Response,
    responses={200: {"content": {XLSX_MEDIA_TYPE: {}}}}
)
def download_students(request: Request, store: PortalStore = Depends(get_store)):
    """
    Stream the student roster as an Excel attachment.

    There is no session check on this route.
    """
    students = store.students.list_all()
    content = build_roster_workbook(students)
    filename = request.app.state.settings.export_filename
    logger.info("Exported %d students (%d bytes)", len(students), len(content))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )
