"""
Idea Box API: Shared Service Helpers
====================================

What:  Base class holding the lookups every box and idea operation starts with.
How:   Parent first, then child: a missing box raises NotFoundError("box")
       before any idea query runs, so "box not found" and "idea not found"
       stay distinguishable.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ideabox.exceptions import NotFoundError, StorageError
from ideabox.models import Box, Idea

logger = logging.getLogger(__name__)


class StorageService:
    """
    Common lookups and error translation for the services layer.

    Subclasses wrap their storage calls in `except SQLAlchemyError` and raise
    `self._storage_error(...)`; NotFoundError passes through untouched.
    """

    async def _get_box(self, db: AsyncSession, box_id: int) -> Box:
        """Fetch a box without its ideas, or raise NotFoundError("box")."""
        result = await db.execute(select(Box).where(Box.id == box_id))
        box = result.scalar_one_or_none()
        if box is None:
            raise NotFoundError(resource="box", resource_id=box_id)
        return box

    async def _get_idea(self, db: AsyncSession, box_id: int, idea_id: int) -> Idea:
        """
        Scoped lookup: the idea must exist AND belong to box_id.

        An idea reached through another box's URL is reported as missing.
        """
        result = await db.execute(
            select(Idea).where(Idea.id == idea_id, Idea.box_id == box_id)
        )
        idea = result.scalar_one_or_none()
        if idea is None:
            raise NotFoundError(
                resource="idea",
                resource_id=idea_id,
                context={"box_id": box_id},
            )
        return idea

    def _storage_error(self, action: str, exc: SQLAlchemyError, **context) -> StorageError:
        """Log a failed persistence call and build the error to raise."""
        logger.error("Storage error while trying to %s: %s", action, str(exc), exc_info=True)
        context["error_type"] = type(exc).__name__
        return StorageError(message=f"could not {action}", context=context)
