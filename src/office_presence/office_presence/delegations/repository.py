from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import Delegation


class DelegationRepository(Protocol):
    def get_by_id(self, delegation_id: int) -> Optional[Delegation]:
        raise NotImplementedError

    def find_active_for(self, delegate_id: str) -> Optional[Delegation]:
        """The single ``is_active`` row for a delegate, regardless of its window."""

        raise NotImplementedError

    def replace_active(
        self,
        *,
        delegator_id: str,
        delegate_id: str,
        start_date: date,
        end_date: date,
    ) -> Delegation:
        """Deactivate the delegate's active grant and insert a new active one.

        Must run as one atomic unit.
        """

        raise NotImplementedError

    def deactivate(self, delegation_id: int) -> bool:
        raise NotImplementedError

    def list_by_delegator(self, delegator_id: str) -> Sequence[Delegation]:
        """Newest first."""

        raise NotImplementedError
