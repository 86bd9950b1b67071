"""
Idea Box API: Custom Exception Hierarchy
========================================

What:  Application-specific exceptions for the three ways a request can fail.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": "<message>"}` with the matching HTTP status code.
Who:   Raised by services; caught by the handlers in main.py.

Exception Hierarchy:
    IdeaBoxError (base)
    ├── ValidationError   → 400 Bad Request
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 400 Bad Request
"""

from typing import Any, Dict, Optional


class IdeaBoxError(Exception):
    """
    Base exception for all Idea Box application errors.

    Attributes:
        message:  Client-facing error description (returned in the "error" field)
        context:  Additional debug info (logged, never returned to the client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(IdeaBoxError):
    """
    Raised when client input fails validation.

    When:    Missing or empty title, malformed JSON body, non-integer path ID.
    HTTP:    400 Bad Request
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(IdeaBoxError):
    """
    Raised when a requested box or idea does not exist.

    When:    The box ID is unknown, or the idea ID is unknown within the box
             named in the URL (including ideas that belong to another box).
    HTTP:    404 Not Found

    The message is always "<resource> not found" so clients can tell a
    missing parent box from a missing idea.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)
        self.resource = resource
        self.resource_id = resource_id


class StorageError(IdeaBoxError):
    """
    Raised when a persistence operation fails.

    When:    Connection lost, constraint violation, locked SQLite file, etc.
    HTTP:    400 Bad Request

    The SQLAlchemy error text is kept in `context` for the server log.
    """

    status_code = 400

    def __init__(
        self,
        message: str = "storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
