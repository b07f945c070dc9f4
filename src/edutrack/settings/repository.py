from __future__ import annotations

from typing import Optional, Protocol

from .model import SystemConfig


class SettingsRepository(Protocol):
    def get(self, key: str) -> Optional[SystemConfig]:
        raise NotImplementedError

    def create_if_absent(self, key: str, config: SystemConfig) -> SystemConfig:
        """Insert `config` unless a record exists; return whatever is stored."""

        raise NotImplementedError

    def replace(self, key: str, config: SystemConfig) -> None:
        raise NotImplementedError
