from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from mysql.connector import errorcode, errors as mysql_errors

from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Delegation
from .repository import DelegationRepository

_COLUMNS = "delegation_id, delegator_id, delegate_id, start_date, end_date, is_active, created_at"


def _to_delegation(row: dict) -> Delegation:
    return Delegation(
        delegation_id=int(row["delegation_id"]),
        delegator_id=str(row["delegator_id"]),
        delegate_id=str(row["delegate_id"]),
        start_date=row["start_date"],
        end_date=row["end_date"],
        is_active=bool(row["is_active"]),
        created_at=row.get("created_at"),
    )


class MySQLDelegationRepository(DelegationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, delegation_id: int) -> Optional[Delegation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM delegations WHERE delegation_id=%s", (int(delegation_id),))
            row = fetchone(cur)
            return _to_delegation(row) if row else None

    def find_active_for(self, delegate_id: str) -> Optional[Delegation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM delegations
                WHERE delegate_id=%s AND is_active=1
                ORDER BY created_at DESC, delegation_id DESC
                LIMIT 1
                """,
                (delegate_id,),
            )
            row = fetchone(cur)
            return _to_delegation(row) if row else None

    def replace_active(
        self,
        *,
        delegator_id: str,
        delegate_id: str,
        start_date: date,
        end_date: date,
    ) -> Delegation:
        # Single transaction; uq_delegations_active_delegate rejects a racing second insert.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    "UPDATE delegations SET is_active=0 WHERE delegate_id=%s AND is_active=1",
                    (delegate_id,),
                )
                cur.execute(
                    """
                    INSERT INTO delegations(delegator_id, delegate_id, start_date, end_date, is_active)
                    VALUES(%s,%s,%s,%s,1)
                    """,
                    (delegator_id, delegate_id, start_date, end_date),
                )
                new_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM delegations WHERE delegation_id=%s", (new_id,))
                return _to_delegation(fetchone(cur))
        except mysql_errors.IntegrityError as exc:
            if exc.errno != errorcode.ER_DUP_ENTRY:
                raise
            raise ConflictError("Another delegation for this user was created at the same time") from exc

    def deactivate(self, delegation_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE delegations SET is_active=0 WHERE delegation_id=%s",
                (int(delegation_id),),
            )
            return cur.rowcount > 0

    def list_by_delegator(self, delegator_id: str) -> Sequence[Delegation]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM delegations
                WHERE delegator_id=%s
                ORDER BY created_at DESC, delegation_id DESC
                """,
                (delegator_id,),
            )
            return [_to_delegation(r) for r in fetchall(cur)]
