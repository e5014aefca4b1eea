# ==== FIELD VALIDATION HELPERS ==== #

"""
Field validation helpers for back-office records.

``is_*`` predicates never raise and return False for missing values.
``require_*`` variants raise ``InvalidArgumentError`` carrying the field
name, the rejected value and the reason.
"""

import re
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from backoffice.exceptions import InvalidArgumentError


# ==== PATTERNS AND LIMITS ==== #

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
PHONE_PATTERN = re.compile(r"^[+]?[0-9]{7,15}$")
POSTAL_CODE_PATTERN = re.compile(r"^[0-9]{5,10}$")
PROJECT_CODE_PATTERN = re.compile(r"^[A-Z]{2,3}-[0-9]{4,6}$")

MIN_BUSINESS_AMOUNT = Decimal("100.00")
MAX_BUSINESS_AMOUNT = Decimal("1000000.00")
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100


# ==== FORMAT PREDICATES ==== #


def is_valid_email(email: Optional[str]) -> bool:
    return bool(email and email.strip() and EMAIL_PATTERN.fullmatch(email.strip()))


def is_valid_phone(phone: Optional[str]) -> bool:
    return phone is not None and PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_postal_code(postal_code: Optional[str]) -> bool:
    return postal_code is not None and POSTAL_CODE_PATTERN.fullmatch(postal_code) is not None


def is_valid_project_code(code: Optional[str]) -> bool:
    """Project codes look like ``PR-001234``."""
    return code is not None and PROJECT_CODE_PATTERN.fullmatch(code) is not None


# ==== AMOUNT PREDICATES ==== #


def is_positive_amount(amount: Optional[Decimal]) -> bool:
    return amount is not None and amount > 0


def is_valid_business_amount(amount: Optional[Decimal]) -> bool:
    """Check the amount lies within the accepted project range, bounds included."""
    return amount is not None and MIN_BUSINESS_AMOUNT <= amount <= MAX_BUSINESS_AMOUNT


# ==== TEXT PREDICATES ==== #


def is_not_blank(text: Optional[str]) -> bool:
    return text is not None and bool(text.strip())


def is_length_between(text: Optional[str], minimum: int, maximum: int) -> bool:
    """Check the stripped length of ``text`` is within ``minimum``..``maximum``."""
    if not is_not_blank(text):
        return False
    return minimum <= len(text.strip()) <= maximum


def is_valid_business_name(name: Optional[str]) -> bool:
    return is_length_between(name, MIN_NAME_LENGTH, MAX_NAME_LENGTH)


# ==== DATE PREDICATES ==== #


def is_not_future_date(value: Optional[date]) -> bool:
    return value is not None and value <= date.today()


def is_future_date(value: Optional[date]) -> bool:
    return value is not None and value > date.today()


def is_valid_date_range(start: Optional[date], end: Optional[date]) -> bool:
    """The end date must fall strictly after the start date."""
    return start is not None and end is not None and end > start


# ==== COLLECTION AND IDENTIFIER PREDICATES ==== #


def is_non_empty_list(items: Optional[Sequence[Any]]) -> bool:
    return items is not None and len(items) > 0


def is_valid_id(identifier: Optional[int]) -> bool:
    return (
        identifier is not None
        and not isinstance(identifier, bool)
        and identifier > 0
    )


# ==== RAISING VALIDATORS ==== #


def require_email(email: Optional[str], field_name: str) -> None:
    """
    Validate an email address or raise.

    Args:
        email (Optional[str]): Email to validate
        field_name (str): Field name reported on failure

    Raises:
        InvalidArgumentError: If the email is missing or malformed
    """
    if not is_valid_email(email):
        raise InvalidArgumentError("invalid email format", field=field_name, value=email)


def require_business_amount(amount: Optional[Decimal], field_name: str) -> None:
    """
    Validate a project amount or raise.

    Args:
        amount (Optional[Decimal]): Amount to validate
        field_name (str): Field name reported on failure

    Raises:
        InvalidArgumentError: If the amount is missing or out of range
    """
    if not is_valid_business_amount(amount):
        raise InvalidArgumentError(
            f"must be between {MIN_BUSINESS_AMOUNT} and {MAX_BUSINESS_AMOUNT}",
            field=field_name,
            value=amount,
        )


def require_business_name(name: Optional[str], field_name: str) -> None:
    if not is_valid_business_name(name):
        raise InvalidArgumentError(
            f"must be between {MIN_NAME_LENGTH} and {MAX_NAME_LENGTH} characters",
            field=field_name,
            value=name,
        )


def require_date_range(start: Optional[date], end: Optional[date]) -> None:
    if not is_valid_date_range(start, end):
        raise InvalidArgumentError("end date must be after start date")


def require_id(identifier: Optional[int], entity_name: str) -> None:
    """Raise unless ``identifier`` is a positive integer."""
    if not is_valid_id(identifier):
        raise InvalidArgumentError(
            "must be a positive number",
            field=f"{entity_name} id",
            value=identifier,
        )
