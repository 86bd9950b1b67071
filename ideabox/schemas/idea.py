"""
Idea Box API: Idea Request/Response Schemas
===========================================

What:  Pydantic models for the idea endpoints under /boxes/{box_id}/ideas.
How:   FastAPI validates request bodies against IdeaRequest (missing or empty
       title → 400) and serializes IdeaResponse.
"""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class IdeaRequest(BaseModel):
    """
    Body of POST and PUT /boxes/{box_id}/ideas[/{idea_id}].

    PUT overwrites both fields: omitting description stores "".
    """
    title: str = Field(min_length=1, description="Idea title (required)")
    description: Optional[str] = Field(default="", description="Free-form description")

    @field_validator("description")
    @classmethod
    def none_to_empty(cls, v: Optional[str]) -> str:
        """Explicit null is stored the same way as an omitted description."""
        return v or ""


class IdeaResponse(BaseModel):
    """
    What:  Idea representation, flat and without a reference to its box.
    Who:   Returned by the idea endpoints and nested inside BoxResponse.ideas.
    """
    id: int = Field(description="Idea identifier")
    title: str = Field(description="Idea title")
    description: str = Field(description="Idea description, empty string when unset")

    model_config = {"from_attributes": True}
