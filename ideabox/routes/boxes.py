"""
Idea Box API: Box Route Handlers
================================

What:  The five /boxes endpoints.
How:   FastAPI validates the body against BoxRequest and the path ID as an
       integer, then delegates to BoxService.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideabox.database import get_db_session
from ideabox.schemas.box import BoxRequest, BoxResponse
from ideabox.schemas.common import ErrorResponse
from ideabox.services.box_service import box_service

router = APIRouter(prefix="/boxes", tags=["Boxes"])


@router.get(
    "",
    response_model=List[BoxResponse],
    responses={400: {"description": "Storage error", "model": ErrorResponse}},
    summary="List all boxes with their ideas",
)
async def list_boxes(db: AsyncSession = Depends(get_db_session)) -> List[BoxResponse]:
    return await box_service.list_boxes(db)


@router.get(
    "/{box_id}",
    response_model=BoxResponse,
    responses={404: {"description": "Box not found", "model": ErrorResponse}},
    summary="Get a single box with its ideas",
)
async def get_box(box_id: int, db: AsyncSession = Depends(get_db_session)) -> BoxResponse:
    return await box_service.get_box(db, box_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=BoxResponse,
    responses={400: {"description": "Missing title or storage error", "model": ErrorResponse}},
    summary="Create a box",
    description="Creates an empty box. The response always has `ideas: []`.",
)
async def create_box(
    request: BoxRequest,
    db: AsyncSession = Depends(get_db_session),
) -> BoxResponse:
    return await box_service.create_box(db, request)


@router.put(
    "/{box_id}",
    response_model=BoxResponse,
    responses={
        400: {"description": "Missing title or storage error", "model": ErrorResponse},
        404: {"description": "Box not found", "model": ErrorResponse},
    },
    summary="Replace a box's title and description",
    description=(
        "Overwrites both title and description; omitting description clears it. "
        "The response has `ideas: []`; fetch the box to see its ideas."
    ),
)
async def update_box(
    box_id: int,
    request: BoxRequest,
    db: AsyncSession = Depends(get_db_session),
) -> BoxResponse:
    return await box_service.update_box(db, box_id, request)


@router.delete(
    "/{box_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Box not found", "model": ErrorResponse}},
    summary="Delete a box and all of its ideas",
)
async def delete_box(box_id: int, db: AsyncSession = Depends(get_db_session)) -> Response:
    await box_service.delete_box(db, box_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
