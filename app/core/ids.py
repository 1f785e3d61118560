import uuid

from app.core.errors import NotFoundError


def parse_id(value: str | uuid.UUID, *, code: str, message: str) -> uuid.UUID:
    """Parse a path/body identifier; a malformed id is reported as not found."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError as exc:
        raise NotFoundError(code=code, message=message) from exc
