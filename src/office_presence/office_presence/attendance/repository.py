from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        user_id: str,
        work_date: date,
        status: AttendanceStatus,
        note: Optional[str] = None,
    ) -> AttendanceRecord:
        """Create-if-absent, else overwrite status and note, as one atomic statement."""

        raise NotImplementedError

    def delete_by_id(self, record_id: int) -> bool:
        raise NotImplementedError

    def list_records(
        self,
        *,
        user_ids: Sequence[str],
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records for ``user_ids`` ordered by date desc, then user."""

        raise NotImplementedError

    def count_by_date(
        self,
        *,
        start_date: date,
        end_date: date,
        status: AttendanceStatus,
    ) -> dict[date, int]:
        """Organisation-wide count of ``status`` per date; dates with no rows are omitted."""

        raise NotImplementedError
