"""
Idea Box API: Idea Route Handlers
=================================

What:  The five /boxes/{box_id}/ideas endpoints.
How:   Delegates to IdeaService, which checks the parent box before the idea.

404 bodies:
    {"error": "box not found"}   the box in the URL does not exist
    {"error": "idea not found"}  the idea does not exist in that box
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from ideabox.database import get_db_session
from ideabox.schemas.common import ErrorResponse
from ideabox.schemas.idea import IdeaRequest, IdeaResponse
from ideabox.services.idea_service import idea_service

router = APIRouter(prefix="/boxes/{box_id}/ideas", tags=["Ideas"])

_NOT_FOUND = {404: {"description": "Box or idea not found", "model": ErrorResponse}}
_BAD_REQUEST = {400: {"description": "Missing title or storage error", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[IdeaResponse],
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="List the ideas in a box",
)
async def list_ideas(
    box_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[IdeaResponse]:
    return await idea_service.list_ideas(db, box_id)


@router.get(
    "/{idea_id}",
    response_model=IdeaResponse,
    responses=_NOT_FOUND,
    summary="Get one idea from a box",
)
async def get_idea(
    box_id: int,
    idea_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> IdeaResponse:
    return await idea_service.get_idea(db, box_id, idea_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=IdeaResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Add an idea to a box",
)
async def create_idea(
    box_id: int,
    request: IdeaRequest,
    db: AsyncSession = Depends(get_db_session),
) -> IdeaResponse:
    return await idea_service.create_idea(db, box_id, request)


@router.put(
    "/{idea_id}",
    response_model=IdeaResponse,
    responses={**_NOT_FOUND, **_BAD_REQUEST},
    summary="Replace an idea's title and description",
)
async def update_idea(
    box_id: int,
    idea_id: int,
    request: IdeaRequest,
    db: AsyncSession = Depends(get_db_session),
) -> IdeaResponse:
    return await idea_service.update_idea(db, box_id, idea_id, request)


@router.delete(
    "/{idea_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
    summary="Delete an idea from a box",
)
async def delete_idea(
    box_id: int,
    idea_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await idea_service.delete_idea(db, box_id, idea_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
