from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for users.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def get_by_id(self, user_id: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def list_all(self) -> Sequence[User]:
        """All users ordered by name."""

        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def list_by_manager(self, manager_id: str) -> Sequence[User]:
        raise NotImplementedError

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
        raise NotImplementedError

    def delete_by_id(self, user_id: str) -> bool:
        """Delete a user and detach anyone who reported to them."""

        raise NotImplementedError

    def update_role(
        self,
        user_id: str,
        *,
        role: Role,
        manager_id: Optional[str],
        detach_reports: bool,
    ) -> bool:
        raise NotImplementedError

    def set_manager(self, user_id: str, manager_id: Optional[str]) -> bool:
        raise NotImplementedError

    def update_profile(self, user_id: str, *, name: str, email: str, team_name: Optional[str]) -> bool:
        raise NotImplementedError
