from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "DOMAIN_ERROR"
    default_message = "Request could not be completed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "INVALID"
    default_message = "Invalid request."


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""

    code = "INVALID_CREDENTIALS"
    default_message = "Invalid ID or Password."


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    code = "FORBIDDEN"
    default_message = "You are not allowed to perform this action."


class SystemLockedError(AuthorizationError):
    code = "SYSTEM_LOCKED"
    default_message = "System is currently locked by administration."


class NotFoundError(DomainError):
    code = "NOT_FOUND"
    default_message = "Record not found."


class ConflictError(DomainError):
    code = "CONFLICT"
    default_message = "Record already exists."


class InternalError(DomainError):
    code = "INTERNAL"
    default_message = "Internal error."


class StoreUnavailableError(InternalError):
    code = "STORE_UNAVAILABLE"
    default_message = "Storage service is unavailable."


# Admission rejections. Order of definition follows the order of the checks.


class SessionNotActive(NotFoundError):
    code = "SESSION_NOT_ACTIVE"
    default_message = "This session is no longer accepting check-ins."


class AlreadyMarked(ConflictError):
    code = "ALREADY_MARKED"
    default_message = "Your attendance is already recorded."


class UnknownIdentity(NotFoundError):
    code = "UNKNOWN_IDENTITY"
    default_message = "Student record not found."


class DeviceConflict(ConflictError):
    code = "DEVICE_CONFLICT"
    default_message = "ID is locked to another physical device."


class DeviceAlreadyUsedBy(ConflictError):
    code = "DEVICE_ALREADY_USED"

    def __init__(self, other_name: str):
        self.other_name = other_name
        super().__init__(f"This device is already linked to a different student ({other_name}).")
