"""
Idea Box API: Box Service
=========================

What:  Business logic for the five /boxes operations.
Who:   Called by ideabox.routes.boxes; calls the database layer.

Operation Summary:
    list_boxes   SELECT boxes ORDER BY id + selectinload(ideas)
    get_box      SELECT box WHERE id + selectinload(ideas) → 404 if absent
    create_box   INSERT box → ideas=[]
    update_box   existence check → overwrite title AND description → ideas=[]
    delete_box   existence check → DELETE ideas WHERE box_id → DELETE box

BoxService is stateless: it receives the session for each call, and the
session dependency owns commit/rollback.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ideabox.exceptions import NotFoundError
from ideabox.models import Box, Idea
from ideabox.schemas.box import BoxRequest, BoxResponse
from ideabox.schemas.idea import IdeaResponse
from ideabox.services.base import StorageService

logger = logging.getLogger(__name__)


def to_box_response(box: Box, with_ideas: bool = True) -> BoxResponse:
    """
    Build the API representation of a box.

    with_ideas=False yields an empty ideas list without touching the
    relationship (used after create and update).
    """
    ideas = []
    if with_ideas:
        ideas = [
            IdeaResponse(id=idea.id, title=idea.title, description=idea.description)
            for idea in box.ideas
        ]
    return BoxResponse(
        id=box.id,
        title=box.title,
        description=box.description,
        ideas=ideas,
    )


class BoxService(StorageService):
    """
    Business logic layer for box operations.

    Error Handling Strategy:
        NotFoundError propagates as-is (→ 404). Any SQLAlchemyError is
        logged and re-raised as StorageError (→ 400).
    """

    async def list_boxes(self, db: AsyncSession) -> List[BoxResponse]:
        """
        Return every box with its nested ideas.

        Query plan:
            SELECT * FROM boxes ORDER BY id
            SELECT * FROM ideas WHERE box_id IN (...) ORDER BY id
        """
        try:
            result = await db.execute(
                select(Box).options(selectinload(Box.ideas)).order_by(Box.id)
            )
            boxes = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._storage_error("list boxes", e)

        return [to_box_response(box) for box in boxes]

    async def get_box(self, db: AsyncSession, box_id: int) -> BoxResponse:
        """
        Retrieve one box with its ideas.

        Raises:
            NotFoundError: No box with this ID (→ 404 "box not found")
            StorageError: Query execution failed (→ 400)
        """
        try:
            result = await db.execute(
                select(Box).options(selectinload(Box.ideas)).where(Box.id == box_id)
            )
            box = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._storage_error("fetch box", e, box_id=box_id)

        if box is None:
            raise NotFoundError(resource="box", resource_id=box_id)
        return to_box_response(box)

    async def create_box(self, db: AsyncSession, request: BoxRequest) -> BoxResponse:
        """
        Persist a new box.

        The flush assigns the autoincrement ID; the commit happens when the
        request's session scope closes.
        """
        box = Box(title=request.title, description=request.description)
        try:
            db.add(box)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("create box", e)

        logger.info("Box %s created", box.id)
        return to_box_response(box, with_ideas=False)

    async def update_box(
        self,
        db: AsyncSession,
        box_id: int,
        request: BoxRequest,
    ) -> BoxResponse:
        """
        Overwrite a box's title and description.

        Both fields are written unconditionally, so a request without a
        description clears it. The response carries an empty ideas list;
        ideas are not re-read.

        Raises:
            NotFoundError: No box with this ID
            StorageError: Query or flush failed
        """
        try:
            box = await self._get_box(db, box_id)
            box.title = request.title
            box.description = request.description
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("update box", e, box_id=box_id)

        logger.info("Box %s updated", box_id)
        return to_box_response(box, with_ideas=False)

    async def delete_box(self, db: AsyncSession, box_id: int) -> None:
        """
        Delete a box and every idea it owns.

        Ideas are deleted explicitly before the box, inside the same
        transaction; ON DELETE CASCADE on ideas.box_id is a second guard.
        A second delete of the same ID raises NotFoundError.
        """
        try:
            await self._get_box(db, box_id)
            ideas_result = await db.execute(delete(Idea).where(Idea.box_id == box_id))
            await db.execute(delete(Box).where(Box.id == box_id))
        except SQLAlchemyError as e:
            raise self._storage_error("delete box", e, box_id=box_id)

        logger.info("Box %s deleted together with %s idea(s)", box_id, ideas_result.rowcount)


box_service = BoxService()
