"""
Idea Box API: Idea SQLAlchemy Model
===================================

What:  ORM model representing the `ideas` table.
Who:   Used by IdeaService (scoped queries) and BoxService (nested listing).

Table Design:
    - box_id is NOT NULL and references boxes.id with ON DELETE CASCADE
    - Index on box_id: every idea query is scoped by its parent box
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ideabox.database import Base

if TYPE_CHECKING:
    from ideabox.models.box import Box


class Idea(Base):
    """
    A single idea, always owned by exactly one box.

    Query Patterns:
        - Scoped lookup: SELECT ... WHERE id = :idea_id AND box_id = :box_id
          (an idea reached through the wrong box is treated as missing)
        - List under box: SELECT ... WHERE box_id = :box_id ORDER BY id
    """

    __tablename__ = "ideas"

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

    box_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("boxes.id", ondelete="CASCADE"),
        nullable=False,
    )

    box: Mapped["Box"] = relationship(back_populates="ideas", lazy="raise")

    __table_args__ = (
        Index("idx_ideas_box_id", "box_id"),
    )

    def __repr__(self) -> str:
        return f"<Idea(id={self.id}, box_id={self.box_id}, title='{self.title}')>"
