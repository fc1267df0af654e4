from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = "user_id, name, email, role, manager_id, team_name"


def _to_user(row: dict) -> User:
    return User(
        user_id=str(row["user_id"]),
        name=row["name"],
        email=row["email"],
        role=Role(row["role"]),
        manager_id=row.get("manager_id"),
        team_name=row.get("team_name"),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_email(self, email: str) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE email=%s", (email,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def list_all(self) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users ORDER BY name ASC, user_id ASC")
            return [_to_user(r) for r in fetchall(cur)]

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY name ASC, user_id ASC",
                (role.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def list_by_manager(self, manager_id: str) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE manager_id=%s ORDER BY name ASC, user_id ASC",
                (manager_id,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def create_user(
        self,
        *,
        user_id: str,
        name: str,
        email: str,
        role: Role,
        manager_id: Optional[str],
        team_name: Optional[str] = None,
    ) -> User:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(user_id, name, email, role, manager_id, team_name)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (user_id, name, email, role.value, manager_id, team_name),
            )
        return User(
            user_id=user_id,
            name=name,
            email=email,
            role=role,
            manager_id=manager_id,
            team_name=team_name,
        )

    def delete_by_id(self, user_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET manager_id=NULL WHERE manager_id=%s", (user_id,))
            cur.execute("DELETE FROM users WHERE user_id=%s", (user_id,))
            return cur.rowcount > 0

    def update_role(
        self,
        user_id: str,
        *,
        role: Role,
        manager_id: Optional[str],
        detach_reports: bool,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if detach_reports:
                cur.execute("UPDATE users SET manager_id=NULL WHERE manager_id=%s", (user_id,))
            cur.execute(
                "UPDATE users SET role=%s, manager_id=%s WHERE user_id=%s",
                (role.value, manager_id, user_id),
            )
            return cur.rowcount > 0

    def set_manager(self, user_id: str, manager_id: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE users SET manager_id=%s WHERE user_id=%s", (manager_id, user_id))
            return cur.rowcount > 0

    def update_profile(self, user_id: str, *, name: str, email: str, team_name: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE users SET name=%s, email=%s, team_name=%s WHERE user_id=%s",
                (name, email, team_name, user_id),
            )
            return cur.rowcount > 0
