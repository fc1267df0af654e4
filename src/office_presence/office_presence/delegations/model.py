from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Delegation:
    """A time-boxed grant of the Tribe Lead's write reach to another user.

    Revocation flips ``is_active``; rows are never deleted so history stays
    auditable. The window is closed on both ends.
    """

    delegation_id: int
    delegator_id: str
    delegate_id: str
    start_date: date
    end_date: date
    is_active: bool = True
    created_at: Optional[datetime] = None

    def is_effective(self, on: date) -> bool:
        return self.is_active and self.start_date <= on <= self.end_date

    def to_dict(self) -> dict:
        return {
            "id": self.delegation_id,
            "delegator_id": self.delegator_id,
            "delegate_id": self.delegate_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "is_active": self.is_active,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass(frozen=True)
class NewDelegation:
    delegate_id: str
    start_date: date
    end_date: date

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "NewDelegation":
        delegate_id = payload.get("delegateId") or payload.get("delegate_id")
        start = payload.get("startDate") or payload.get("start_date")
        end = payload.get("endDate") or payload.get("end_date")
        if not delegate_id or not start or not end:
            raise ValidationError("delegateId, startDate and endDate are required")
        try:
            return cls(delegate_id=str(delegate_id), start_date=parse_iso_date(str(start)), end_date=parse_iso_date(str(end)))
        except ValueError:
            raise ValidationError("Dates must be in YYYY-MM-DD format")
