# backend/app/routers/schools.py
from __future__ import annotations

from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Optional
import logging

from ..dependencies import get_store
from ..errors import ErrorKind, StoreError, ValidationFailure
from ..geo import rank_by_distance, within
from ..models.request import SchoolIn
from ..models.response import (
    AddSchoolResponse,
    ErrorResponse,
    ListSchoolsResponse,
    SchoolCreated,
    SchoolHit,
    UserLocation,
)
from ..queries import SchoolStore
from ..validation import validate_coordinates, validate_filters, validate_school

router = APIRouter(tags=["schools"])
log = logging.getLogger(__name__)

_ERRORS = {400: {"model": ErrorResponse}, 503: {"model": ErrorResponse}}


@router.post("/addSchool", response_model=AddSchoolResponse, status_code=201, responses=_ERRORS)
def add_school(
    body: Any = Body(None, examples=[SchoolIn.EXAMPLE]),
    store: SchoolStore = Depends(get_store),
) -> AddSchoolResponse:
    """Validate a school and store it; duplicates by name + address are rejected."""
    school = validate_school(SchoolIn.from_raw(body).model_dump(), store)
    school_id = store.insert(school.name, school.address, school.lat, school.lon)
    log.info("[/addSchool] id=%s name=%r lat=%s lon=%s", school_id, school.name, school.lat, school.lon)

    return AddSchoolResponse(
        data=SchoolCreated(
            school_id=school_id,
            name=school.name,
            address=school.address,
            latitude=school.lat,
            longitude=school.lon,
        )
    )


@router.get("/listSchools", response_model=ListSchoolsResponse, responses=_ERRORS)
def list_schools(
    latitude: Optional[str] = Query(None, description="Reference latitude in decimal degrees"),
    longitude: Optional[str] = Query(None, description="Reference longitude in decimal degrees"),
    radius: Optional[str] = Query(None, description="Only schools within this many km"),
    limit: Optional[str] = Query(None, description="Return at most this many schools"),
    store: SchoolStore = Depends(get_store),
) -> ListSchoolsResponse:
    """All schools ordered by distance from the given point, closest first."""
    ref = validate_coordinates(latitude, longitude)
    radius_km, max_results = validate_filters(radius, limit)

    try:
        schools = store.fetch_all()
    except StoreError as e:
        log.exception("Fetching schools failed")
        raise ValidationFailure(ErrorKind.STORE_UNAVAILABLE, "Failed to fetch schools") from e

    ranked = within(rank_by_distance(ref, schools), radius_km=radius_km, limit=max_results)
    log.info("[/listSchools] lat=%s lon=%s | stored=%d returned=%d", ref.lat, ref.lon, len(schools), len(ranked))

    return ListSchoolsResponse(
        user_location=UserLocation(latitude=ref.lat, longitude=ref.lon),
        total_schools=len(ranked),
        schools=[SchoolHit.from_ranked(r) for r in ranked],
    )
