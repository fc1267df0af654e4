from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable, Optional, Sequence

from ..access.resolver import AccessResolver
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import today_local, week_monday
from ..common.validators import require_non_negative
from ..core.constants import DEFAULT_CAPACITY
from ..core.enums import AttendanceStatus, Operation, Weekday
from ..users.model import Principal
from .model import DayOccupancy, OfficeCapacity, parse_weekday
from .repository import CapacityRepository

logger = logging.getLogger(__name__)


class CapacityService:
    """Per-weekday office capacity and same-day occupancy.

    Purely advisory: the ledger never rejects a write because a day is full.
    """

    def __init__(
        self,
        capacity: CapacityRepository,
        attendance: AttendanceRepository,
        resolver: AccessResolver,
        *,
        clock: Callable[[], date] = today_local,
    ):
        self._capacity = capacity
        self._attendance = attendance
        self._resolver = resolver
        self._clock = clock

    def _settings(self) -> dict[Weekday, int]:
        self._capacity.ensure_defaults(DEFAULT_CAPACITY)
        return {row.weekday: row.capacity for row in self._capacity.list_all()}

    def capacity_of(self, weekday: Weekday | str) -> int:
        weekday = parse_weekday(weekday)
        self._capacity.ensure_defaults(DEFAULT_CAPACITY)
        row = self._capacity.get(weekday)
        return row.capacity if row else 0

    def week_occupancy(self, reference_date: Optional[date] = None, week_offset: int = 0) -> list[DayOccupancy]:
        monday = week_monday(reference_date or self._clock(), week_offset)
        friday = monday + timedelta(days=4)

        settings = self._settings()
        booked = self._attendance.count_by_date(
            start_date=monday,
            end_date=friday,
            status=AttendanceStatus.OFFICE,
        )

        week: list[DayOccupancy] = []
        for offset, weekday in enumerate(Weekday):
            day = monday + timedelta(days=offset)
            week.append(
                DayOccupancy.compute(
                    weekday,
                    day,
                    capacity=settings.get(weekday, 0),
                    booked=booked.get(day, 0),
                )
            )
        return week

    def view_week(
        self,
        principal: Principal,
        *,
        reference_date: Optional[date] = None,
        week_offset: int = 0,
    ) -> list[DayOccupancy]:
        self._resolver.require_role_operation(Operation.VIEW_CAPACITY, principal)
        return self.week_occupancy(reference_date, week_offset)

    def list_capacity(self, principal: Principal) -> Sequence[OfficeCapacity]:
        self._resolver.require_role_operation(Operation.VIEW_CAPACITY, principal)
        self._capacity.ensure_defaults(DEFAULT_CAPACITY)
        return self._capacity.list_all()

    def update_capacity(self, principal: Principal, *, weekday: Weekday | str, capacity: int) -> OfficeCapacity:
        self._resolver.require_role_operation(Operation.EDIT_CAPACITY, principal)
        weekday = parse_weekday(weekday)
        capacity = require_non_negative(capacity, "Capacity")

        # Materialize first so editing one day never leaves the others unset.
        self._capacity.ensure_defaults(DEFAULT_CAPACITY)
        row = self._capacity.upsert(weekday, capacity)
        logger.info("Capacity for %s set to %s by %s", weekday.value, capacity, principal.user_id)
        return row
