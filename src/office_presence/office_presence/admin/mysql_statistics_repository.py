from __future__ import annotations

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor
from .repository import StatisticsRepository

_RESET_TABLES = ("attendance_records", "delegations", "office_capacity")


class MySQLStatisticsRepository(StatisticsRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def reset_all(self) -> dict[str, int]:
        deleted: dict[str, int] = {}
        with db_cursor(self._conn_factory) as (_, cur):
            for table in _RESET_TABLES:
                cur.execute(f"DELETE FROM {table}")
                deleted[table] = int(cur.rowcount)
        return deleted
