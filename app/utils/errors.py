"""Service-level error types and id helpers."""
from bson import ObjectId
from bson.errors import InvalidId


class NotFoundError(ValueError):
    """Raised when a record is missing or not owned by the requesting user."""


def to_object_id(value: str, not_found_message: str) -> ObjectId:
    """
    Parse a document id, treating malformed ids as not found.

    Raises:
        NotFoundError: If the value is not a valid ObjectId
    """
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise NotFoundError(not_found_message)
