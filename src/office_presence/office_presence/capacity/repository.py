from __future__ import annotations

from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import Weekday
from .model import OfficeCapacity


class CapacityRepository(Protocol):
    def ensure_defaults(self, defaults: Mapping[Weekday, int]) -> None:
        """Insert ``defaults`` only when no row exists yet.

        Must be safe for concurrent first readers: never duplicate rows.
        """

        raise NotImplementedError

    def list_all(self) -> Sequence[OfficeCapacity]:
        """Rows ordered Monday to Friday."""

        raise NotImplementedError

    def get(self, weekday: Weekday) -> Optional[OfficeCapacity]:
        raise NotImplementedError

    def upsert(self, weekday: Weekday, capacity: int) -> OfficeCapacity:
        raise NotImplementedError
