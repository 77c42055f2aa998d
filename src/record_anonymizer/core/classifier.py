"""
Field type classification.

Infers the semantic category of a record field from its name. The
classifier is a fixed keyword heuristic: the first category (in priority
order) with a keyword contained in the lower-cased field name wins.

Example:
    >>> classify_field("firstName")
    <SemanticType.NAME: 'NAME'>
    >>> classify_field("address_id")
    <SemanticType.ADDRESS: 'ADDRESS'>
"""

from enum import Enum
from typing import Optional


class SemanticType(str, Enum):
    """Semantic categories used to pick a substitution policy."""

    NAME = "NAME"
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    ADDRESS = "ADDRESS"
    SSN = "SSN"
    CREDIT_CARD = "CREDIT_CARD"
    DATE = "DATE"
    NUMBER = "NUMBER"
    TEXT = "TEXT"
    ID = "ID"
    BOOLEAN = "BOOLEAN"
    UNKNOWN = "UNKNOWN"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]


_DESCRIPTIONS: dict[SemanticType, str] = {
    SemanticType.NAME: "Personal names - first, last, full",
    SemanticType.EMAIL: "Email addresses",
    SemanticType.PHONE: "Phone numbers",
    SemanticType.ADDRESS: "Street addresses, cities, postal codes",
    SemanticType.SSN: "Social Security Numbers",
    SemanticType.CREDIT_CARD: "Credit card numbers",
    SemanticType.DATE: "Date values",
    SemanticType.NUMBER: "Numeric values",
    SemanticType.TEXT: "General text content",
    SemanticType.ID: "Identifier values",
    SemanticType.BOOLEAN: "Boolean values",
    SemanticType.UNKNOWN: "Unknown or unclassified data type",
}

# Checked in order; the first match wins
FIELD_KEYWORDS: list[tuple[SemanticType, tuple[str, ...]]] = [
    (SemanticType.NAME, ("name", "firstname", "lastname")),
    (SemanticType.EMAIL, ("email", "mail")),
    (SemanticType.PHONE, ("phone", "tel", "mobile")),
    (SemanticType.ADDRESS, ("address", "street", "city", "zip")),
    (SemanticType.SSN, ("ssn", "social")),
    (SemanticType.CREDIT_CARD, ("card", "credit")),
    (SemanticType.DATE, ("date", "birth", "dob")),
    (SemanticType.ID, ("id", "identifier")),
]


def classify_field(field_name: Optional[str]) -> SemanticType:
    """Classify a field by its name.

    Args:
        field_name: The record key. None or empty yields UNKNOWN.

    Returns:
        The inferred SemanticType.
    """
    if not field_name:
        return SemanticType.UNKNOWN

    lower_field = field_name.lower()
    for semantic_type, keywords in FIELD_KEYWORDS:
        if any(keyword in lower_field for keyword in keywords):
            return semantic_type

    return SemanticType.UNKNOWN
