from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from ..common.validators import optional_text


@dataclass(frozen=True)
class DisplayFields:
    """Name/department/section sent with a check-in.

    Display only: never used to decide who is checking in.
    """

    name: Optional[str] = None
    department: Optional[str] = None
    section: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "DisplayFields":
        return cls(
            name=optional_text(data.get("name")),
            department=optional_text(data.get("department")),
            section=optional_text(data.get("section")),
        )
