"""
Officer directory endpoint - read-only view of the routing reference data.
"""

from typing import List

from fastapi import APIRouter, Depends

from app.models.complaint import Officer
from app.services.complaint_intake import ComplaintIntakeService, get_intake_service

router = APIRouter(prefix="/officers", tags=["Officers"])


@router.get("", response_model=List[Officer])
def list_officers(service: ComplaintIntakeService = Depends(get_intake_service)):
    """Officers the intake pipeline assigns complaints to."""
    return list(service.assignor.directory)
