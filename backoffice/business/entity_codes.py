# ==== ENTITY TYPES AND CODE PREFIXES ==== #

"""
Entity types known to the back-office and the prefixes of their codes.

Generated identifiers start with a short prefix so operators can tell a
customer code from an invoice code at a glance.
"""

from enum import Enum
from typing import Dict


class EntityType(str, Enum):
    """Business entities that receive generated codes."""

    CUSTOMER = "CUSTOMER"
    ORDER = "ORDER"
    SUPPLIER = "SUPPLIER"
    INVOICE = "INVOICE"
    USER = "USER"
    PRODUCT = "PRODUCT"


ENTITY_PREFIXES: Dict[EntityType, str] = {
    EntityType.CUSTOMER: "CUS",
    EntityType.ORDER: "ORD",
    EntityType.SUPPLIER: "SUP",
    EntityType.INVOICE: "INV",
    EntityType.USER: "USR",
    EntityType.PRODUCT: "PRD",
}

GENERIC_PREFIX = "GEN"


def get_prefix(entity_type: str) -> str:
    """
    Get the code prefix for an entity type.

    Lookup is case-insensitive; unknown types share the generic prefix.

    Args:
        entity_type (str): Entity type name, e.g. "invoice"

    Returns:
        str: Prefix such as "INV", or "GEN" for unknown types
    """
    try:
        return ENTITY_PREFIXES[EntityType(entity_type.strip().upper())]
    except ValueError:
        return GENERIC_PREFIX
