from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..core.exceptions import NotFoundError
from .model import User
from .repository import UserRepository


class HierarchyDirectory:
    """Read model over the user store: roles and the single upward link.

    Pure lookups. Storage errors propagate to the caller untouched.
    """

    def __init__(self, users: UserRepository):
        self._users = users

    def find_user(self, user_id: str) -> Optional[User]:
        return self._users.get_by_id(user_id)

    def get_user(self, user_id: str) -> User:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("Target user not found")
        return user

    def all_users(self) -> Sequence[User]:
        return self._users.list_all()

    def all_user_ids(self) -> frozenset[str]:
        return frozenset(u.user_id for u in self._users.list_all())

    def tribe_lead(self) -> Optional[User]:
        leads = self._users.list_by_role(Role.TRIBE_LEAD)
        return leads[0] if leads else None

    def chapter_leads(self) -> Sequence[User]:
        return self._users.list_by_role(Role.CHAPTER_LEAD)

    def resolve_manager(self, user_id: str) -> Optional[User]:
        user = self.get_user(user_id)
        if user.role == Role.TRIBE_LEAD:
            return None
        if user.role == Role.CHAPTER_LEAD:
            return self.tribe_lead()
        if not user.manager_id:
            return None
        return self._users.get_by_id(user.manager_id)

    def direct_reports_of(self, user_id: str) -> list[User]:
        """Chapter Lead: their reporters. Tribe Lead: every Chapter Lead."""
        user = self.get_user(user_id)
        if user.role == Role.TRIBE_LEAD:
            return list(self._users.list_by_role(Role.CHAPTER_LEAD))
        if user.role == Role.CHAPTER_LEAD:
            return list(self._users.list_by_manager(user.user_id))
        return []
