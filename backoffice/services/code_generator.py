# ==== CODE GENERATOR SERVICE ==== #

"""
Unique code generation for back-office entities.

Codes combine an entity prefix, a second-resolution timestamp and a random
suffix, e.g. ``INV-20260314092653-4F1A9C2B``.
"""

import uuid
from datetime import datetime

from backoffice.business.entity_codes import get_prefix
from backoffice.exceptions import InvalidArgumentError


TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise InvalidArgumentError("must not be None or blank", field=field, value=value)
    return value.strip()


def _timestamp() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


def generate_unique_code(entity_type: str) -> str:
    """
    Generate a unique code for an entity type.

    Args:
        entity_type (str): Entity type such as "customer" or "invoice"

    Returns:
        str: Code formatted as ``PREFIX-yyyyMMddHHmmss-XXXXXXXX``

    Raises:
        InvalidArgumentError: If entity_type is None or blank
    """
    prefix = get_prefix(_require_text(entity_type, "entity_type"))
    suffix = uuid.uuid4().hex[:8].upper()
    return f"{prefix}-{_timestamp()}-{suffix}"


def generate_simple_code() -> str:
    """Generate a 32 character uppercase hex code without dashes."""
    return uuid.uuid4().hex.upper()


def generate_prefixed_code(prefix: str) -> str:
    """
    Generate a timestamped code with a caller-chosen prefix.

    Codes from the same second collide; use ``generate_unique_code`` when
    uniqueness matters.

    Args:
        prefix (str): Prefix, uppercased in the result

    Returns:
        str: Code formatted as ``PREFIX-yyyyMMddHHmmss``

    Raises:
        InvalidArgumentError: If prefix is None or blank
    """
    return f"{_require_text(prefix, 'prefix').upper()}-{_timestamp()}"
