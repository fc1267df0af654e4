from __future__ import annotations

from collections import Counter
from datetime import date, timedelta
from typing import Callable, Optional

from ..access.resolver import AccessResolver
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import date_range, today_local
from ..common.math_utils import percent_half_up
from ..common.validators import require_date_order, require_max_span, require_non_negative
from ..core.constants import DEFAULT_OCCUPANCY_DAYS, DEFAULT_PATTERN_DAYS, MAX_ANALYTICS_RANGE_DAYS
from ..core.enums import AttendanceStatus
from ..users.model import Principal

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class AnalyticsService:
    """Attendance statistics, always computed over the caller's read set."""

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

    def _records(self, actor: Principal, *, start: date, end: date, status: Optional[AttendanceStatus] = None):
        user_ids = sorted(self._resolver.accessible_read_set(actor))
        return self._attendance.list_records(user_ids=user_ids, start_date=start, end_date=end, status=status)

    def occupancy(
        self,
        actor: Principal,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[dict]:
        end = end_date or self._clock()
        start = start_date or end - timedelta(days=DEFAULT_OCCUPANCY_DAYS)
        require_date_order(start, end)
        require_max_span(start, end, MAX_ANALYTICS_RANGE_DAYS)

        counts = Counter(
            r.work_date for r in self._records(actor, start=start, end=end, status=AttendanceStatus.OFFICE)
        )
        return [{"date": day.isoformat(), "count": counts.get(day, 0)} for day in date_range(start, end)]

    def weekly_pattern(self, actor: Principal, *, days: int = DEFAULT_PATTERN_DAYS) -> list[dict]:
        days = require_non_negative(days, "days")
        end = self._clock()
        records = self._records(actor, start=end - timedelta(days=days), end=end, status=AttendanceStatus.OFFICE)
        counts = Counter(r.work_date.weekday() for r in records)
        return [{"day": name[:3], "count": counts.get(index, 0)} for index, name in enumerate(DAY_NAMES)]

    def overview(self, actor: Principal, *, days: int = DEFAULT_OCCUPANCY_DAYS) -> dict:
        days = require_non_negative(days, "days")
        end = self._clock()
        visible = self._resolver.accessible_read_set(actor)
        records = self._records(actor, start=end - timedelta(days=days), end=end)

        office = [r for r in records if r.status == AttendanceStatus.OFFICE]
        remote = [r for r in records if r.status == AttendanceStatus.REMOTE]
        unique_dates = {r.work_date for r in records}

        per_day = Counter(r.work_date.weekday() for r in office)
        most_popular = None
        if per_day:
            best = max(per_day.values())
            most_popular = DAY_NAMES[min(i for i, c in per_day.items() if c == best)]

        return {
            "total_users": len(visible),
            "average_occupancy": percent_half_up(len(office), len(unique_dates) * len(visible)),
            "most_popular_day": most_popular,
            "remote_work_rate": percent_half_up(len(remote), len(records)),
        }
