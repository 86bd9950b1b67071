"""
Idea Box API: ORM Models
========================

Importing this package registers every table on Base.metadata.
"""

from ideabox.models.box import Box
from ideabox.models.idea import Idea

__all__ = ["Box", "Idea"]
