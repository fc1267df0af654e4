from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional, Sequence

from ..access.resolver import AccessResolver
from ..common.datetime_utils import today_local, week_monday
from ..common.validators import clean_note, require_date_order
from ..core.constants import ALLOCATION_STATUSES, SELF_SERVICE_STATUSES
from ..core.enums import AttendanceStatus, Operation
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Principal
from .model import AllocationCommand, AllocationResult, AttendanceCommand, AttendanceRecord, parse_status
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """The attendance ledger.

    Any status may follow any other; every write replaces status and note in
    full. Capacity is never consulted here.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        resolver: AccessResolver,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._attendance = attendance
        self._resolver = resolver
        self._clock = clock

    def upsert(
        self,
        actor: Principal,
        *,
        target_user_id: str,
        work_date: date,
        status: AttendanceStatus | str,
        note: Optional[str] = None,
        at: date | datetime | None = None,
    ) -> AttendanceRecord:
        self._resolver.authorize(Operation.WRITE_ATTENDANCE, actor, target_user_id, at=at)
        status = parse_status(status, SELF_SERVICE_STATUSES)

        record = self._attendance.upsert(
            user_id=target_user_id,
            work_date=work_date,
            status=status,
            note=clean_note(note),
        )
        logger.info(
            "Attendance %s set to %s for user=%s by %s",
            work_date.isoformat(),
            status.value,
            target_user_id,
            actor.user_id,
        )
        return record

    def submit(self, actor: Principal, command: AttendanceCommand) -> AttendanceRecord:
        return self.upsert(
            actor,
            target_user_id=command.target_user_id,
            work_date=command.work_date,
            status=command.status,
            note=command.note,
        )

    def allocate(
        self,
        actor: Principal,
        *,
        target_user_id: str,
        work_date: date,
        status: AttendanceStatus | str,
        note: Optional[str] = None,
        at: date | datetime | None = None,
    ) -> AllocationResult:
        """Write on behalf of someone else; self-service has its own entry point."""
        if target_user_id == actor.user_id:
            raise ValidationError("Use the self-service endpoint to set your own attendance")
        self._resolver.authorize(Operation.ALLOCATE_ATTENDANCE, actor, target_user_id, at=at)
        status = parse_status(status, ALLOCATION_STATUSES)

        record = self._attendance.upsert(
            user_id=target_user_id,
            work_date=work_date,
            status=status,
            note=clean_note(note),
        )
        logger.info(
            "Attendance %s allocated as %s for user=%s by %s",
            work_date.isoformat(),
            status.value,
            target_user_id,
            actor.user_id,
        )
        return AllocationResult(record=record, allocated_by=actor)

    def allocate_command(self, actor: Principal, command: AllocationCommand) -> AllocationResult:
        return self.allocate(
            actor,
            target_user_id=command.target_user_id,
            work_date=command.work_date,
            status=command.status,
            note=command.note,
        )

    def delete(self, actor: Principal, *, record_id: int) -> None:
        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Attendance record not found")

        # Owner or Tribe Lead by own role; delegation does not apply.
        self._resolver.authorize(Operation.DELETE_ATTENDANCE, actor, record.user_id)

        if not self._attendance.delete_by_id(record.record_id):
            raise NotFoundError("Attendance record not found")
        logger.info("Attendance record %s deleted by %s", record.record_id, actor.user_id)

    def get(self, actor: Principal, *, record_id: int) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(record_id))
        if not record:
            raise NotFoundError("Attendance record not found")
        if record.user_id not in self._resolver.accessible_read_set(actor):
            raise AuthorizationError("You do not have permission to access this user's attendance")
        return record

    def list_records(
        self,
        actor: Principal,
        *,
        user_id: Optional[str] = None,
        chapter_lead_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: AttendanceStatus | str | None = None,
    ) -> Sequence[AttendanceRecord]:
        require_date_order(start_date, end_date)
        if status is not None:
            status = parse_status(status, frozenset(AttendanceStatus))

        user_ids = self._resolver.narrow(actor, user_id=user_id, chapter_lead_id=chapter_lead_id)
        if not user_ids:
            return []

        return self._attendance.list_records(
            user_ids=sorted(user_ids),
            start_date=start_date,
            end_date=end_date,
            status=status,
        )

    def week(
        self,
        actor: Principal,
        *,
        reference_date: Optional[date] = None,
        week_offset: int = 0,
    ) -> dict:
        """Monday to Sunday of the requested week, limited to the caller's read set."""
        start = week_monday(reference_date or self._clock(), week_offset)
        end = start + timedelta(days=6)
        records = self.list_records(actor, start_date=start, end_date=end)
        return {
            "start_date": start.isoformat(),
            "end_date": end.isoformat(),
            "records": sorted(records, key=lambda r: (r.work_date, r.user_id)),
        }
