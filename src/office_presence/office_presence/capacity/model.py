from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping

from ..common.math_utils import percent_half_up
from ..common.validators import require_non_negative
from ..core.enums import Weekday
from ..core.exceptions import ValidationError


def parse_weekday(value: Weekday | str) -> Weekday:
    if isinstance(value, Weekday):
        return value
    try:
        return Weekday(str(value).strip().capitalize())
    except ValueError:
        raise ValidationError("Invalid day of week")


@dataclass(frozen=True)
class OfficeCapacity:
    weekday: Weekday
    capacity: int

    def to_dict(self) -> dict:
        return {"weekday": self.weekday.value, "capacity": self.capacity}


@dataclass(frozen=True)
class CapacityUpdate:
    weekday: Weekday
    capacity: int

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "CapacityUpdate":
        weekday = payload.get("dayOfWeek") or payload.get("weekday")
        if not weekday or payload.get("capacity") is None:
            raise ValidationError("dayOfWeek and capacity are required")
        return cls(weekday=parse_weekday(weekday), capacity=require_non_negative(payload["capacity"], "Capacity"))


@dataclass(frozen=True)
class DayOccupancy:
    """Advisory read-model: how full the office is on one workday."""

    weekday: Weekday
    day: date
    capacity: int
    booked: int
    available: int
    is_overbooked: bool
    utilization_percent: int

    @classmethod
    def compute(cls, weekday: Weekday, day: date, *, capacity: int, booked: int) -> "DayOccupancy":
        return cls(
            weekday=weekday,
            day=day,
            capacity=capacity,
            booked=booked,
            available=max(capacity - booked, 0),
            is_overbooked=booked > capacity,
            utilization_percent=percent_half_up(booked, capacity),
        )

    def to_dict(self) -> dict:
        return {
            "day": self.weekday.value,
            "date": self.day.isoformat(),
            "capacity": self.capacity,
            "booked": self.booked,
            "available": self.available,
            "is_overbooked": self.is_overbooked,
            "utilization_percent": self.utilization_percent,
        }
