"""
FlyBook Backend: Identifier Validation
========================================

Every keyed operation (fetch, update, delete) goes through parse_identifier()
before touching the database, so a malformed id is reported as a client error
(400) and never reaches the query as a guaranteed miss (404).
"""

import uuid

from flybook.exceptions import ValidationError


def parse_identifier(raw: str, resource: str = "resource") -> uuid.UUID:
    """
    Parse a path identifier into the UUID the storage layer keys on.

    Args:
        raw: Identifier exactly as it appeared in the URL
        resource: Resource name for the error message ("flight", "hotel", ...)

    Raises:
        ValidationError: raw is not a UUID
    """
    try:
        return uuid.UUID(raw)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(
            message=f"'{raw}' is not a valid {resource} identifier",
            field="id",
            context={"value": str(raw)},
        )
