# medtrack/errors.py
"""
HTTP-aware error types raised by the services.

They subclass werkzeug's HTTPException so the application-wide error handler
renders them as {"success": False, "message": ...} with the right status code.
"""
from werkzeug.exceptions import BadRequest, Conflict, NotFound, UnprocessableEntity


class NotFoundError(NotFound):
    """A referenced medication or consumption record does not exist for the user."""


class MalformedInputError(BadRequest):
    """A date or time string could not be parsed."""


class ValidationError(UnprocessableEntity):
    """Fields are missing or violate a medication schedule rule."""


class ConflictError(Conflict):
    """A unique rule (e.g. medication name per user) would be violated."""
