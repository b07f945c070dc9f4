from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import StaffMember


class StaffRepository(Protocol):
    """Store of one staff kind (teachers or administrators)."""

    def get_by_identifier(self, identifier: str) -> Optional[StaffMember]:
        raise NotImplementedError

    def create(self, member: StaffMember) -> bool:
        raise NotImplementedError

    def list_all(self) -> Sequence[StaffMember]:
        raise NotImplementedError

    def delete(self, identifier: str) -> bool:
        raise NotImplementedError
