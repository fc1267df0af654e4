from __future__ import annotations

from datetime import date, datetime
from typing import Callable, Optional

from ..common.datetime_utils import today_local
from .model import Delegation
from .repository import DelegationRepository


def as_day(at: date | datetime | None, clock: Callable[[], date]) -> date:
    if at is None:
        return clock()
    if isinstance(at, datetime):
        return at.date()
    return at


class DelegationRegistry:
    """Read side of delegations: which grant, if any, is in force right now."""

    def __init__(self, delegations: DelegationRepository, *, clock: Callable[[], date] = today_local):
        self._delegations = delegations
        self._clock = clock

    def active_delegation_for(self, user_id: str, at: date | datetime | None = None) -> Optional[Delegation]:
        delegation = self._delegations.find_active_for(user_id)
        if delegation and delegation.is_effective(as_day(at, self._clock)):
            return delegation
        return None

    def has_active_delegation(self, user_id: str, at: date | datetime | None = None) -> bool:
        return self.active_delegation_for(user_id, at) is not None
