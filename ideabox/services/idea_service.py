"""
Idea Box API: Idea Service
==========================

What:  Business logic for the five /boxes/{box_id}/ideas operations.
Who:   Called by ideabox.routes.ideas.

Every operation is a two-step lookup:
    1. SELECT box WHERE id = :box_id        → NotFoundError("box")
    2. SELECT idea WHERE id = :idea_id
                     AND box_id = :box_id   → NotFoundError("idea")
Create and list only need step 1.
"""

import logging
from typing import List

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ideabox.models import Idea
from ideabox.schemas.idea import IdeaRequest, IdeaResponse
from ideabox.services.base import StorageService

logger = logging.getLogger(__name__)


def to_idea_response(idea: Idea) -> IdeaResponse:
    return IdeaResponse(id=idea.id, title=idea.title, description=idea.description)


class IdeaService(StorageService):
    """Business logic layer for ideas, always scoped to a parent box."""

    async def list_ideas(self, db: AsyncSession, box_id: int) -> List[IdeaResponse]:
        """
        Return the ideas of one box, ordered by ID.

        Raises:
            NotFoundError: The box does not exist (an empty box returns [])
        """
        try:
            await self._get_box(db, box_id)
            result = await db.execute(
                select(Idea).where(Idea.box_id == box_id).order_by(Idea.id)
            )
            ideas = result.scalars().all()
        except SQLAlchemyError as e:
            raise self._storage_error("list ideas", e, box_id=box_id)

        return [to_idea_response(idea) for idea in ideas]

    async def get_idea(self, db: AsyncSession, box_id: int, idea_id: int) -> IdeaResponse:
        try:
            await self._get_box(db, box_id)
            idea = await self._get_idea(db, box_id, idea_id)
        except SQLAlchemyError as e:
            raise self._storage_error("fetch idea", e, box_id=box_id, idea_id=idea_id)

        return to_idea_response(idea)

    async def create_idea(
        self,
        db: AsyncSession,
        box_id: int,
        request: IdeaRequest,
    ) -> IdeaResponse:
        """
        Persist a new idea under an existing box.

        No row is written when the box is missing.
        """
        try:
            box = await self._get_box(db, box_id)
            idea = Idea(
                title=request.title,
                description=request.description,
                box_id=box.id,
            )
            db.add(idea)
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("create idea", e, box_id=box_id)

        logger.info("Idea %s created in box %s", idea.id, box_id)
        return to_idea_response(idea)

    async def update_idea(
        self,
        db: AsyncSession,
        box_id: int,
        idea_id: int,
        request: IdeaRequest,
    ) -> IdeaResponse:
        """Overwrite title and description of an idea in this box."""
        try:
            await self._get_box(db, box_id)
            idea = await self._get_idea(db, box_id, idea_id)
            idea.title = request.title
            idea.description = request.description
            await db.flush()
        except SQLAlchemyError as e:
            raise self._storage_error("update idea", e, box_id=box_id, idea_id=idea_id)

        logger.info("Idea %s in box %s updated", idea_id, box_id)
        return to_idea_response(idea)

    async def delete_idea(self, db: AsyncSession, box_id: int, idea_id: int) -> None:
        try:
            await self._get_box(db, box_id)
            await self._get_idea(db, box_id, idea_id)
            await db.execute(delete(Idea).where(Idea.id == idea_id, Idea.box_id == box_id))
        except SQLAlchemyError as e:
            raise self._storage_error("delete idea", e, box_id=box_id, idea_id=idea_id)

        logger.info("Idea %s deleted from box %s", idea_id, box_id)


idea_service = IdeaService()
