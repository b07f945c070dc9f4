from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from ..common.datetime_utils import now_local, to_iso
from ..core.constants import SYSTEM_SETTINGS_KEY
from ..core.exceptions import ValidationError
from .model import SystemConfig
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


def config_view(config: SystemConfig) -> dict:
    return {"isLoginLocked": config.is_login_locked, "lastUpdated": to_iso(config.last_updated)}


class SettingsService:
    """Global system configuration, created lazily on first read."""

    def __init__(self, settings: SettingsRepository, *, clock: Optional[Callable] = None):
        self._settings = settings
        self._clock = clock or now_local

    def get(self) -> SystemConfig:
        config = self._settings.get(SYSTEM_SETTINGS_KEY)
        if config is None:
            config = self._settings.create_if_absent(
                SYSTEM_SETTINGS_KEY, SystemConfig(is_login_locked=False, last_updated=self._clock())
            )
        return config

    def is_login_locked(self) -> bool:
        return self.get().is_login_locked

    def replace(self, values: Mapping[str, Any]) -> SystemConfig:
        """Full replace: fields absent from `values` fall back to defaults."""
        locked = values.get("isLoginLocked", False)
        if not isinstance(locked, bool):
            raise ValidationError("isLoginLocked must be a boolean.")
        config = SystemConfig(is_login_locked=locked, last_updated=self._clock())
        self._settings.replace(SYSTEM_SETTINGS_KEY, config)
        logger.info("System config replaced: isLoginLocked=%s", locked)
        return config
