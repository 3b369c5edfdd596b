"""Domain enums used across SQLAlchemy models and Pydantic schemas.

All enums use str mixin so values serialise to JSON as plain strings.
"""

from __future__ import annotations

from enum import Enum


class QuoteStatus(str, Enum):
    """Quote lifecycle. Flat: any status may be set from any other."""

    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EXPIRED = "expired"


class LeadStatus(str, Enum):
    """Sales lead progression."""

    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    UNQUALIFIED = "unqualified"
    CONVERTED = "converted"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FilterOperator(str, Enum):
    """Predicates a list filter may use."""

    EQ = "=="
    NE = "!="
    LT = "<"
    LE = "<="
    GT = ">"
    GE = ">="
    IN = "in"
    ARRAY_CONTAINS = "array-contains"
