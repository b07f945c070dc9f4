from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account kinds sharing one login path."""

    STUDENT = "STUDENT"
    TEACHER = "TEACHER"
    ADMIN = "ADMIN"


class BindOutcome(str, Enum):
    """Result of a conditional device binding."""

    BOUND = "BOUND"
    ALREADY_BOUND = "ALREADY_BOUND"
    TOKEN_TAKEN = "TOKEN_TAKEN"
    MISSING = "MISSING"


class AppendOutcome(str, Enum):
    """Result of a conditional attendance append."""

    APPENDED = "APPENDED"
    DUPLICATE = "DUPLICATE"
    INACTIVE = "INACTIVE"
