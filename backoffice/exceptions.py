# ==== DOMAIN EXCEPTIONS ==== #

"""
Exceptions raised by the back-office utilities.

Callers get a single error kind for absent or invalid inputs. It keeps the
offending field name, the value that was supplied and the reason so the
failure can be reported without re-parsing the message.
"""

from typing import Any, Optional


class InvalidArgumentError(ValueError):
    """Raised when a required argument is missing or fails validation."""

    def __init__(
        self,
        reason: str,
        field: Optional[str] = None,
        value: Any = None
    ):
        self.reason = reason
        self.field = field
        self.value = value

        if field is None:
            message = reason
        else:
            message = f"Invalid value for '{field}' ({value!r}): {reason}"

        super().__init__(message)

    def to_dict(self) -> dict:
        """Serialize the error triple for structured logs and API payloads."""
        return {
            "field": self.field,
            "value": None if self.value is None else str(self.value),
            "reason": self.reason,
        }


def require_present(value: Any, field: str) -> Any:
    """Return ``value`` unchanged, raising if it is ``None``."""
    if value is None:
        raise InvalidArgumentError("must not be None", field=field, value=None)
    return value
