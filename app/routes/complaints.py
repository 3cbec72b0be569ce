"""
Complaint endpoints - citizen submission and read-back.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from app.models.complaint import ComplaintCreate, ComplaintResponse
from app.services.complaint_intake import (
    ComplaintIntakeService,
    ComplaintPersistenceError,
    ComplaintRejected,
    get_intake_service,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/complaints", tags=["Complaints"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ComplaintResponse)
def submit_complaint(
    complaint: ComplaintCreate,
    background_tasks: BackgroundTasks,
    service: ComplaintIntakeService = Depends(get_intake_service),
):
    """
    Submit a new citizen complaint.

    This endpoint:
    1. Moderates the photo and description (AI-generated, duplicate, spam)
    2. Classifies, prioritizes and routes the complaint to a ward officer
    3. Stores it in Firestore (complaints collection)
    4. Records an admin notification and emails the officer after responding

    Returns the created complaint with generated ID.
    """
    logger.info(f"📝 POST /complaints - user={complaint.user_id}, category={complaint.category}")

    try:
        outcome = service.submit(complaint, schedule=background_tasks.add_task)
    except ComplaintRejected as e:
        logger.info(f"🚫 POST /complaints - rejected ({e.code}): {e.reason or e.message}")
        raise HTTPException(status_code=e.status_code, detail=e.to_detail())
    except ComplaintPersistenceError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": str(e)},
        )
    except Exception as e:
        logger.error(f"❌ POST /complaints - Complaint creation failed: {str(e)}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create complaint"},
        )

    logger.info(f"✅ Complaint created successfully: {outcome.complaint.id}")
    return outcome.complaint


@router.get("/{complaint_id}", response_model=ComplaintResponse)
def get_complaint(
    complaint_id: str,
    service: ComplaintIntakeService = Depends(get_intake_service),
):
    try:
        data = service.store.get_complaint(complaint_id)
    except Exception as e:
        raise HTTPException(
            status_code=500,
            detail=f"Failed to retrieve complaint: {str(e)}",
        )

    if data is None:
        raise HTTPException(status_code=404, detail=f"Complaint {complaint_id} not found")
    return ComplaintResponse.from_document(complaint_id, data)
