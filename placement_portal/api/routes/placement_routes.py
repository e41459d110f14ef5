"""
Placement Routes

POST /add_placement_drive    - Post a placement drive
GET  /view-placement-details - List every drive (teacher or student session)
"""

import logging

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import RedirectResponse

from placement_portal.core.auth import get_store, session_principal
from placement_portal.core.forms import submitted
from placement_portal.services.mongo_service import PortalStore
from placement_portal.schemas.schemas import (
    PlacementCreate, PlacementListResponse, PlacementResponse, PrincipalKind
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Placements"])

# Teachers and students see the same drives through different pages
LIST_VIEWS = {
    PrincipalKind.teacher: "view_placement_details",
    PrincipalKind.student: "stud_placement",
}


@router.post("/add_placement_drive", response_class=RedirectResponse, status_code=303)
def add_placement_drive(
    placement: PlacementCreate = Depends(submitted(PlacementCreate)),
    store: PortalStore = Depends(get_store)
):
    """
    Save a placement drive.

    There is no session check here; the form that posts to it is
    teacher-gated.
    """
    placement_id = store.placements.insert(placement.to_document())
    logger.info("Added placement drive %s (%s)", placement_id, placement.company_name)
    return RedirectResponse("/view-placement-details", status_code=status.HTTP_303_SEE_OTHER)


@router.get("/view-placement-details", response_model=PlacementListResponse)
def view_placement_details(
    request: Request,
    response: Response,
    store: PortalStore = Depends(get_store)
):
    """All drives, unfiltered and unpaginated. Anonymous visitors go home."""
    kind = session_principal(request)
    if kind is None:
        return RedirectResponse("/", status_code=status.HTTP_302_FOUND)

    response.headers["Cache-Control"] = "no-store"
    placements = [PlacementResponse.model_validate(doc) for doc in store.placements.list_all()]
    return PlacementListResponse(view=LIST_VIEWS[kind], placements=placements, total=len(placements))
