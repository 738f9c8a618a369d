# routes/mock_admin.py
from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.collection.service import CollectionService
from deps.collection import get_collection_service
from schemas import ErrorResponse, ProfileResponse, ResetResponse

# Test teardown helpers; not part of the MoMo API surface.
router = APIRouter(prefix="/mock", tags=["mock-admin"])


@router.delete(
    "/requesttopay/{reference_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
)
async def delete_request_to_pay(
    reference_id: str,
    service: CollectionService = Depends(get_collection_service),
):
    service.delete_transaction(reference_id)
    return Response(status_code=204)


@router.post("/reset", response_model=ResetResponse)
async def reset(service: CollectionService = Depends(get_collection_service)):
    return ResetResponse(cleared=service.reset())


@router.get("/profile", response_model=ProfileResponse)
async def profile(service: CollectionService = Depends(get_collection_service)):
    return ProfileResponse(**service.config.describe(), pending_jobs=service.scheduler.pending_jobs())
