from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, ClassVar, Mapping, Optional

from ..common.datetime_utils import parse_iso_date
from ..core.constants import ALLOCATION_STATUSES, SELF_SERVICE_STATUSES
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..users.model import User


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one user's status for one calendar date."""

    record_id: int
    user_id: str
    work_date: date
    status: AttendanceStatus
    note: Optional[str] = None
    updated_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "id": self.record_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "note": self.note,
        }


def parse_status(value: Any, allowed: frozenset[AttendanceStatus]) -> AttendanceStatus:
    if isinstance(value, AttendanceStatus):
        status = value
    else:
        try:
            status = AttendanceStatus(str(value).strip().upper())
        except ValueError:
            status = None
    if status not in allowed:
        names = ", ".join(sorted(s.value.lower() for s in allowed))
        raise ValidationError(f"Status must be one of: {names}")
    return status


def _parse_work_date(value: Any) -> date:
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError("Date must be in YYYY-MM-DD format")


@dataclass(frozen=True)
class AttendanceCommand:
    """Self-service write: OFFICE, REMOTE, ABSENT or VACATION."""

    VOCABULARY: ClassVar[frozenset[AttendanceStatus]] = SELF_SERVICE_STATUSES

    target_user_id: str
    work_date: date
    status: AttendanceStatus
    note: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, default_user_id: Optional[str] = None):
        target = payload.get("userId") or payload.get("user_id") or default_user_id
        if not target:
            raise ValidationError("userId is required")
        if not payload.get("date"):
            raise ValidationError("date is required")
        return cls(
            target_user_id=str(target),
            work_date=_parse_work_date(payload["date"]),
            status=parse_status(payload.get("status"), cls.VOCABULARY),
            note=payload.get("notes", payload.get("note")),
        )


@dataclass(frozen=True)
class AllocationCommand(AttendanceCommand):
    """Allocation for somebody else: OFFICE, REMOTE or OFF.

    Its vocabulary is separate from the self-service one.
    """

    VOCABULARY: ClassVar[frozenset[AttendanceStatus]] = ALLOCATION_STATUSES

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], *, default_user_id: Optional[str] = None):
        return super().from_payload(payload, default_user_id=None)


@dataclass(frozen=True)
class AllocationResult:
    record: AttendanceRecord
    allocated_by: User

    def to_dict(self) -> dict:
        return {
            "record": self.record.to_dict(),
            "allocated_by": {
                "id": self.allocated_by.user_id,
                "name": self.allocated_by.name,
                "role": self.allocated_by.role.value,
            },
        }
