from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import SystemConfig
from .repository import SettingsRepository


def _to_config(row: dict) -> SystemConfig:
    return SystemConfig(is_login_locked=bool(row["is_login_locked"]), last_updated=row["last_updated"])


class MySQLSettingsRepository(SettingsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, key: str) -> Optional[SystemConfig]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT is_login_locked, last_updated FROM system_config WHERE config_key=%s", (key,))
            row = fetchone(cur)
            return _to_config(row) if row else None

    def create_if_absent(self, key: str, config: SystemConfig) -> SystemConfig:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT IGNORE INTO system_config(config_key, is_login_locked, last_updated) VALUES(%s,%s,%s)",
                (key, int(config.is_login_locked), config.last_updated),
            )
            cur.execute("SELECT is_login_locked, last_updated FROM system_config WHERE config_key=%s", (key,))
            return _to_config(fetchone(cur))

    def replace(self, key: str, config: SystemConfig) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_config(config_key, is_login_locked, last_updated)
                VALUES(%s,%s,%s)
                ON DUPLICATE KEY UPDATE is_login_locked=VALUES(is_login_locked), last_updated=VALUES(last_updated)
                """,
                (key, int(config.is_login_locked), config.last_updated),
            )
