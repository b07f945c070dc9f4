from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import BindOutcome
from .model import Student


class StudentRepository(Protocol):
    """Identity store for students, keyed by canonical roll number.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_roll_number(self, roll_number: str) -> Optional[Student]:
        raise NotImplementedError

    def find_by_device(self, device_id: str, *, exclude_roll_number: Optional[str] = None) -> Optional[Student]:
        raise NotImplementedError

    def bind_device(self, roll_number: str, device_id: str) -> BindOutcome:
        """Set the device token only if none is bound yet.

        Must be atomic: BOUND when this call (or an earlier one) bound exactly
        `device_id`, ALREADY_BOUND when a different token is held,
        TOKEN_TAKEN when another student holds `device_id`, MISSING when the
        student does not exist.
        """

        raise NotImplementedError

    def clear_device(self, roll_number: str) -> bool:
        raise NotImplementedError

    def create(self, student: Student) -> bool:
        """Insert; False when the roll number already exists."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        raise NotImplementedError

    def delete(self, roll_number: str) -> bool:
        raise NotImplementedError
