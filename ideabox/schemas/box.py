"""
Idea Box API: Box Request/Response Schemas
==========================================

What:  Pydantic models defining the /boxes API contract.
Why:   Request validation, response serialization and OpenAPI docs come from
       the same definitions.

Schemas are separate from the SQLAlchemy models: responses expose ideas
without their box back-reference, and create/update responses carry an
empty ideas list instead of re-reading children.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from ideabox.schemas.idea import IdeaResponse


class BoxRequest(BaseModel):
    """
    Body of POST /boxes and PUT /boxes/{box_id}.

    Update semantics: both fields are always written. A PUT without
    description clears the stored description.
    """
    title: str = Field(min_length=1, description="Box title (required)")
    description: Optional[str] = Field(default="", description="Free-form description")

    @field_validator("description")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        return v or ""


class BoxResponse(BaseModel):
    """
    What:  Box representation with its nested ideas.
    Who:   Returned by every /boxes endpoint.

    ideas is always a list (empty when the box has none, and always empty
    in the create and update responses).
    """
    id: int = Field(description="Box identifier")
    title: str = Field(description="Box title")
    description: str = Field(description="Box description, empty string when unset")
    ideas: List[IdeaResponse] = Field(default_factory=list, description="Ideas in this box")

    model_config = {"from_attributes": True}
