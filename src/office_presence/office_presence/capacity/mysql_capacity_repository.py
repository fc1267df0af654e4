from __future__ import annotations

from typing import Mapping, Optional, Sequence

from ..core.enums import Weekday
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import OfficeCapacity
from .repository import CapacityRepository


class MySQLCapacityRepository(CapacityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def ensure_defaults(self, defaults: Mapping[Weekday, int]) -> None:
        rows = " UNION ALL ".join(["SELECT %s AS weekday, %s AS capacity"] * len(defaults))
        params: list[object] = []
        for weekday, capacity in defaults.items():
            params.extend([weekday.value, int(capacity)])

        # One statement: weekday is the primary key, so a racing reader can only no-op.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT IGNORE INTO office_capacity(weekday, capacity)
                SELECT d.weekday, d.capacity
                FROM ({rows}) AS d
                WHERE NOT EXISTS (SELECT 1 FROM office_capacity)
                """,
                tuple(params),
            )

    def list_all(self) -> Sequence[OfficeCapacity]:
        with db_cursor(self._conn_factory) as (_, cur):
            # ENUM columns sort by declaration order, i.e. Monday first.
            cur.execute("SELECT weekday, capacity FROM office_capacity ORDER BY weekday ASC")
            return [
                OfficeCapacity(weekday=Weekday(r["weekday"]), capacity=int(r["capacity"]))
                for r in fetchall(cur)
            ]

    def get(self, weekday: Weekday) -> Optional[OfficeCapacity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT weekday, capacity FROM office_capacity WHERE weekday=%s", (weekday.value,))
            r = fetchone(cur)
            if not r:
                return None
            return OfficeCapacity(weekday=Weekday(r["weekday"]), capacity=int(r["capacity"]))

    def upsert(self, weekday: Weekday, capacity: int) -> OfficeCapacity:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO office_capacity(weekday, capacity)
                VALUES(%s,%s)
                ON DUPLICATE KEY UPDATE capacity=VALUES(capacity)
                """,
                (weekday.value, int(capacity)),
            )
        return OfficeCapacity(weekday=weekday, capacity=int(capacity))
