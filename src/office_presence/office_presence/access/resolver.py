from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..core.enums import Operation, Relation, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..delegations.registry import DelegationRegistry
from ..users.directory import HierarchyDirectory
from ..users.model import Principal, User
from .policy import DENIAL_MESSAGES, is_allowed

logger = logging.getLogger(__name__)


class AccessResolver:
    """Single place where reach is computed.

    Ordering rule used by every caller: a named target is looked up first
    (unknown ids raise ``NotFoundError``, so existence of an id is visible to
    anyone), then the policy decides (``AuthorizationError``).
    """

    def __init__(self, directory: HierarchyDirectory, registry: DelegationRegistry):
        self._directory = directory
        self._registry = registry

    def is_delegated(self, principal: Principal, at: date | datetime | None = None) -> bool:
        return self._registry.has_active_delegation(principal.user_id, at)

    def relation_of(self, actor: Principal, target: Optional[User]) -> Relation:
        if target is None:
            return Relation.NONE
        if target.user_id == actor.user_id:
            return Relation.SELF
        if actor.role == Role.CHAPTER_LEAD and target.manager_id == actor.user_id:
            return Relation.DIRECT_REPORT
        if actor.role == Role.TRIBE_LEAD and target.role == Role.CHAPTER_LEAD:
            return Relation.DIRECT_REPORT
        return Relation.OTHER

    # region Read reach
    def accessible_read_set(self, principal: Principal, at: date | datetime | None = None) -> frozenset[str]:
        if principal.role == Role.TRIBE_LEAD or self.is_delegated(principal, at):
            return self._directory.all_user_ids()
        if principal.role == Role.CHAPTER_LEAD:
            reports = self._directory.direct_reports_of(principal.user_id)
            return frozenset({principal.user_id, *(r.user_id for r in reports)})
        return frozenset({principal.user_id})

    def narrow(
        self,
        principal: Principal,
        *,
        user_id: Optional[str] = None,
        chapter_lead_id: Optional[str] = None,
        at: date | datetime | None = None,
    ) -> frozenset[str]:
        """Intersect the read set with an explicit filter.

        A filter reaching outside the read set is refused, never silently
        emptied.
        """

        accessible = self.accessible_read_set(principal, at)

        if user_id is not None:
            target = self._directory.get_user(user_id)
            if target.user_id not in accessible:
                self._deny(principal, Operation.READ_ATTENDANCE, target.user_id)
            accessible = accessible & {target.user_id}

        if chapter_lead_id is not None:
            lead = self._directory.find_user(chapter_lead_id)
            if not lead:
                raise NotFoundError("Chapter Lead not found")
            if lead.role != Role.CHAPTER_LEAD:
                raise ValidationError("Filter user is not a Chapter Lead")
            team = {lead.user_id, *(r.user_id for r in self._directory.direct_reports_of(lead.user_id))}
            if not team <= accessible:
                self._deny(principal, Operation.READ_ATTENDANCE, lead.user_id)
            accessible = accessible & team

        return frozenset(accessible)

    # endregion

    # region Write reach
    def can_act_on_behalf_of(
        self,
        actor: Principal,
        target_user_id: str,
        at: date | datetime | None = None,
    ) -> bool:
        """Write reach as a yes/no answer. An unknown target raises ``NotFoundError``."""
        try:
            self.authorize(Operation.WRITE_ATTENDANCE, actor, target_user_id, at=at)
        except AuthorizationError:
            return False
        return True

    def authorize(
        self,
        operation: Operation,
        principal: Principal,
        target_user_id: Optional[str] = None,
        *,
        at: date | datetime | None = None,
    ) -> Optional[User]:
        """Raise unless the policy table allows ``operation``; returns the target user."""

        target = self._directory.get_user(target_user_id) if target_user_id is not None else None
        relation = self.relation_of(principal, target)

        if is_allowed(operation, principal.role, relation):
            return target
        if is_allowed(operation, principal.role, relation, delegated=True) and self.is_delegated(principal, at):
            return target

        self._deny(principal, operation, target_user_id)
        return None

    def require_role_operation(self, operation: Operation, principal: Principal) -> None:
        """Target-less check for administrative operations."""
        self.authorize(operation, principal)

    # endregion

    # External interface names
    def resolve_access(self, principal: Principal) -> frozenset[str]:
        return self.accessible_read_set(principal)

    def authorize_write(self, principal: Principal, target_user_id: str) -> bool:
        return self.can_act_on_behalf_of(principal, target_user_id)

    @staticmethod
    def _deny(principal: Principal, operation: Operation, target_user_id: Optional[str]) -> None:
        logger.warning(
            "Denied %s for user=%s role=%s target=%s",
            operation.value,
            principal.user_id,
            principal.role.value,
            target_user_id,
        )
        raise AuthorizationError(DENIAL_MESSAGES.get(operation, "Insufficient permissions"))
