from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable

from ..core.enums import Role
from ..core.exceptions import SystemLockedError
from ..settings.service import SettingsService


def is_lock_exempt(role: Role, exempt_roles: AbstractSet[Role]) -> bool:
    return role in exempt_roles


def parse_roles(values: Iterable[str]) -> frozenset[Role]:
    return frozenset(Role(str(v).strip().upper()) for v in values if str(v).strip())


@dataclass(frozen=True)
class LoginLockPolicy:
    """Decides whether a resolved role may pass while the system is locked."""

    settings: SettingsService
    exempt_roles: frozenset[Role] = frozenset({Role.ADMIN})

    def ensure_allowed(self, role: Role) -> None:
        if is_lock_exempt(role, self.exempt_roles):
            return
        if self.settings.is_login_locked():
            raise SystemLockedError()
