from __future__ import annotations

import dataclasses
from datetime import date, datetime

import pytest

from office_presence.attendance.model import AttendanceRecord
from office_presence.capacity.model import OfficeCapacity
from office_presence.container import assemble
from office_presence.core.enums import Role, Weekday
from office_presence.delegations.model import Delegation
from office_presence.users.model import User


class InMemoryUsers:
    def __init__(self, users=()):
        self.users: dict[str, User] = {u.user_id: u for u in users}

    def get_by_id(self, user_id):
        return self.users.get(user_id)

    def get_by_email(self, email):
        return next((u for u in self.users.values() if u.email == email), None)

    def list_all(self):
        return sorted(self.users.values(), key=lambda u: (u.name, u.user_id))

    def list_by_role(self, role):
        return [u for u in self.list_all() if u.role == role]

    def list_by_manager(self, manager_id):
        return [u for u in self.list_all() if u.manager_id == manager_id]

    def create_user(self, *, user_id, name, email, role, manager_id, team_name=None):
        user = User(user_id=user_id, name=name, email=email, role=role, manager_id=manager_id, team_name=team_name)
        self.users[user_id] = user
        return user

    def _detach_reports(self, user_id):
        for u in self.list_by_manager(user_id):
            self.users[u.user_id] = dataclasses.replace(u, manager_id=None)

    def delete_by_id(self, user_id):
        if user_id not in self.users:
            return False
        del self.users[user_id]
        self._detach_reports(user_id)
        return True

    def update_role(self, user_id, *, role, manager_id, detach_reports):
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = dataclasses.replace(user, role=role, manager_id=manager_id)
        if detach_reports:
            self._detach_reports(user_id)
        return True

    def set_manager(self, user_id, manager_id):
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = dataclasses.replace(user, manager_id=manager_id)
        return True

    def update_profile(self, user_id, *, name, email, team_name):
        user = self.users.get(user_id)
        if not user:
            return False
        self.users[user_id] = dataclasses.replace(user, name=name, email=email, team_name=team_name)
        return True


class InMemoryDelegations:
    def __init__(self):
        self.rows: dict[int, Delegation] = {}
        self._next_id = 1

    def get_by_id(self, delegation_id):
        return self.rows.get(int(delegation_id))

    def find_active_for(self, delegate_id):
        active = [d for d in self.rows.values() if d.delegate_id == delegate_id and d.is_active]
        return max(active, key=lambda d: d.delegation_id) if active else None

    def replace_active(self, *, delegator_id, delegate_id, start_date, end_date):
        for d in list(self.rows.values()):
            if d.delegate_id == delegate_id and d.is_active:
                self.rows[d.delegation_id] = dataclasses.replace(d, is_active=False)

        delegation = Delegation(
            delegation_id=self._next_id,
            delegator_id=delegator_id,
            delegate_id=delegate_id,
            start_date=start_date,
            end_date=end_date,
            is_active=True,
            created_at=datetime(2025, 1, 1, 9, 0),
        )
        self.rows[delegation.delegation_id] = delegation
        self._next_id += 1
        return delegation

    def deactivate(self, delegation_id):
        d = self.rows.get(int(delegation_id))
        if not d:
            return False
        self.rows[d.delegation_id] = dataclasses.replace(d, is_active=False)
        return True

    def list_by_delegator(self, delegator_id):
        items = [d for d in self.rows.values() if d.delegator_id == delegator_id]
        return sorted(items, key=lambda d: d.delegation_id, reverse=True)

    def active_count(self, delegate_id) -> int:
        return sum(1 for d in self.rows.values() if d.delegate_id == delegate_id and d.is_active)


class InMemoryAttendance:
    def __init__(self):
        self.by_key: dict[tuple[str, date], AttendanceRecord] = {}
        self._next_id = 1

    def get_by_id(self, record_id):
        return next((r for r in self.by_key.values() if r.record_id == int(record_id)), None)

    def upsert(self, *, user_id, work_date, status, note=None):
        existing = self.by_key.get((user_id, work_date))
        if existing:
            record = dataclasses.replace(existing, status=status, note=note)
        else:
            record = AttendanceRecord(
                record_id=self._next_id,
                user_id=user_id,
                work_date=work_date,
                status=status,
                note=note,
            )
            self._next_id += 1
        self.by_key[(user_id, work_date)] = record
        return record

    def delete_by_id(self, record_id):
        record = self.get_by_id(record_id)
        if not record:
            return False
        del self.by_key[(record.user_id, record.work_date)]
        return True

    def list_records(self, *, user_ids, start_date=None, end_date=None, status=None):
        wanted = set(user_ids)
        items = [
            r
            for r in self.by_key.values()
            if r.user_id in wanted
            and (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (status is None or r.status == status)
        ]
        items.sort(key=lambda r: r.user_id)
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def count_by_date(self, *, start_date, end_date, status):
        counts: dict[date, int] = {}
        for r in self.by_key.values():
            if r.status == status and start_date <= r.work_date <= end_date:
                counts[r.work_date] = counts.get(r.work_date, 0) + 1
        return counts


class InMemoryCapacity:
    def __init__(self):
        self.rows: dict[Weekday, int] = {}
        self.materialized = 0

    def ensure_defaults(self, defaults):
        if not self.rows:
            self.rows.update(defaults)
            self.materialized += 1

    def list_all(self):
        order = list(Weekday)
        return [OfficeCapacity(w, c) for w, c in sorted(self.rows.items(), key=lambda kv: order.index(kv[0]))]

    def get(self, weekday):
        if weekday not in self.rows:
            return None
        return OfficeCapacity(weekday, self.rows[weekday])

    def upsert(self, weekday, capacity):
        self.rows[weekday] = capacity
        return OfficeCapacity(weekday, capacity)


class InMemoryStatistics:
    def __init__(self, attendance: InMemoryAttendance, delegations: InMemoryDelegations, capacity: InMemoryCapacity):
        self._attendance = attendance
        self._delegations = delegations
        self._capacity = capacity

    def reset_all(self):
        deleted = {
            "attendance_records": len(self._attendance.by_key),
            "delegations": len(self._delegations.rows),
            "office_capacity": len(self._capacity.rows),
        }
        self._attendance.by_key.clear()
        self._delegations.rows.clear()
        self._capacity.rows.clear()
        return deleted


class MutableClock:
    def __init__(self, today: date):
        self.today = today

    def __call__(self) -> date:
        return self.today


def build_org() -> list[User]:
    """Tina leads the tribe; Carl and Cora lead chapters; Rex has no lead."""
    return [
        User("tl", "Tina Tribe", "tina@company.com", Role.TRIBE_LEAD),
        User("cl-1", "Carl Chapter", "carl@company.com", Role.CHAPTER_LEAD),
        User("cl-2", "Cora Chapter", "cora@company.com", Role.CHAPTER_LEAD),
        User("r-1", "Rita Reporter", "rita@company.com", Role.REPORTER, "cl-1"),
        User("r-2", "Ron Reporter", "ron@company.com", Role.REPORTER, "cl-1"),
        User("r-3", "Rosa Reporter", "rosa@company.com", Role.REPORTER, "cl-2"),
        User("r-4", "Rex Reporter", "rex@company.com", Role.REPORTER, None),
    ]


@pytest.fixture
def clock():
    return MutableClock(date(2025, 1, 6))


@pytest.fixture
def repos():
    attendance = InMemoryAttendance()
    delegations = InMemoryDelegations()
    capacity = InMemoryCapacity()
    return {
        "users_repo": InMemoryUsers(build_org()),
        "delegations_repo": delegations,
        "attendance_repo": attendance,
        "capacity_repo": capacity,
        "statistics_repo": InMemoryStatistics(attendance, delegations, capacity),
    }


@pytest.fixture
def container(repos, clock):
    return assemble(clock=clock, **repos)


@pytest.fixture
def user(container):
    def _get(user_id: str) -> User:
        return container.directory.get_user(user_id)

    return _get
