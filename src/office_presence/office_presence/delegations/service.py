from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..access.resolver import AccessResolver
from ..common.validators import require_date_order
from ..core.enums import Operation
from ..core.exceptions import NotFoundError, ValidationError
from ..users.directory import HierarchyDirectory
from ..users.model import Principal
from .model import Delegation
from .registry import DelegationRegistry
from .repository import DelegationRepository

logger = logging.getLogger(__name__)


class DelegationService:
    """Use cases: grant, revoke and inspect delegated authority.

    Managing delegations is itself never delegable: a delegate cannot
    re-delegate or revoke.
    """

    def __init__(
        self,
        delegations: DelegationRepository,
        registry: DelegationRegistry,
        directory: HierarchyDirectory,
        resolver: AccessResolver,
    ):
        self._delegations = delegations
        self._registry = registry
        self._directory = directory
        self._resolver = resolver

    def create_delegation(
        self,
        actor: Principal,
        *,
        delegate_id: str,
        start_date: date,
        end_date: date,
    ) -> Delegation:
        self._resolver.require_role_operation(Operation.MANAGE_DELEGATIONS, actor)
        require_date_order(start_date, end_date, strict=True)

        delegate = self._directory.find_user(delegate_id)
        if not delegate:
            raise NotFoundError("Delegate user not found")
        if delegate.user_id == actor.user_id:
            raise ValidationError("The Tribe Lead cannot delegate to themselves")

        delegation = self._delegations.replace_active(
            delegator_id=actor.user_id,
            delegate_id=delegate.user_id,
            start_date=start_date,
            end_date=end_date,
        )
        logger.info(
            "Delegation %s created: %s -> %s (%s..%s)",
            delegation.delegation_id,
            actor.user_id,
            delegate.user_id,
            start_date.isoformat(),
            end_date.isoformat(),
        )
        return delegation

    def revoke(self, actor: Principal, *, delegation_id: int) -> Delegation:
        self._resolver.require_role_operation(Operation.MANAGE_DELEGATIONS, actor)

        delegation = self._delegations.get_by_id(int(delegation_id))
        if not delegation:
            raise NotFoundError("Delegation not found")
        if not delegation.is_active:
            return delegation

        self._delegations.deactivate(delegation.delegation_id)
        logger.info("Delegation %s revoked by %s", delegation.delegation_id, actor.user_id)
        return self._delegations.get_by_id(delegation.delegation_id) or delegation

    def list_delegations(self, actor: Principal) -> Sequence[Delegation]:
        self._resolver.require_role_operation(Operation.MANAGE_DELEGATIONS, actor)
        return self._delegations.list_by_delegator(actor.user_id)

    def active_delegation_for(self, user_id: str, at: Optional[date] = None) -> Optional[Delegation]:
        return self._registry.active_delegation_for(user_id, at)

    def active_status(self, actor: Principal) -> dict:
        delegation = self._registry.active_delegation_for(actor.user_id)
        return {
            "has_active_delegation": delegation is not None,
            "delegation": delegation.to_dict() if delegation else None,
        }
