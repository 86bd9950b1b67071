"""
Idea Box API: Box SQLAlchemy Model
==================================

What:  ORM model representing the `boxes` table.
How:   Inherits from the declarative Base; Alembic reads it for migrations.
Who:   Used by BoxService/IdeaService and by Alembic.

Table Design:
    - Integer autoincrement primary key, assigned by the database
    - description is NOT NULL with '' as default, so an omitted description
      round-trips as an empty string rather than null
    - ideas relationship owns its children (delete-orphan) and relies on the
      database-level ON DELETE CASCADE (passive_deletes)
"""

from typing import TYPE_CHECKING, List

from sqlalchemy import Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideabox.database import Base

if TYPE_CHECKING:
    from ideabox.models.idea import Idea


class Box(Base):
    """
    Top-level container grouping related ideas.

    Lifecycle:
        1. Created via POST /boxes
        2. Title/description overwritten via PUT /boxes/{id}
        3. Deleted via DELETE /boxes/{id}, together with all its ideas

    Query Patterns:
        - List with ideas: SELECT boxes + SELECT ideas WHERE box_id IN (...)
          (selectinload, two queries regardless of box count)
        - Existence check: SELECT ... WHERE id = :id (primary key)
    """

    __tablename__ = "boxes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # Ideas are never lazy-loaded (async sessions cannot); callers use
    # selectinload(Box.ideas) when they need the collection.
    ideas: Mapped[List["Idea"]] = relationship(
        back_populates="box",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Idea.id",
        lazy="raise",
    )

    def __repr__(self) -> str:
        return f"<Box(id={self.id}, title='{self.title}')>"
