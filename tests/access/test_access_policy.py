from __future__ import annotations

from office_presence.access.policy import (
    DELEGABLE_OPERATIONS,
    POLICY,
    compare_roles,
    is_allowed,
    role_at_least,
    role_rank,
)
from office_presence.core.enums import Operation, Relation, Role


def test_role_order_is_total():
    assert role_rank(Role.REPORTER) < role_rank(Role.CHAPTER_LEAD) < role_rank(Role.TRIBE_LEAD)
    assert compare_roles(Role.REPORTER, Role.TRIBE_LEAD) == -1
    assert compare_roles(Role.TRIBE_LEAD, Role.CHAPTER_LEAD) == 1
    assert compare_roles(Role.CHAPTER_LEAD, Role.CHAPTER_LEAD) == 0
    assert role_at_least(Role.TRIBE_LEAD, Role.CHAPTER_LEAD)
    assert not role_at_least(Role.REPORTER, Role.CHAPTER_LEAD)


def test_only_attendance_operations_are_delegable():
    assert DELEGABLE_OPERATIONS == {
        Operation.READ_ATTENDANCE,
        Operation.WRITE_ATTENDANCE,
        Operation.ALLOCATE_ATTENDANCE,
    }


def test_every_operation_has_a_tribe_lead_entry():
    for operation in Operation:
        assert (operation, Role.TRIBE_LEAD) in POLICY


def test_reporter_allocation_needs_delegation():
    assert not is_allowed(Operation.ALLOCATE_ATTENDANCE, Role.REPORTER, Relation.OTHER)
    assert is_allowed(Operation.ALLOCATE_ATTENDANCE, Role.REPORTER, Relation.OTHER, delegated=True)


def test_delegation_does_not_apply_to_fixed_operations():
    assert not is_allowed(Operation.DELETE_ATTENDANCE, Role.REPORTER, Relation.OTHER, delegated=True)
    assert not is_allowed(Operation.RESET_STATISTICS, Role.CHAPTER_LEAD, Relation.NONE, delegated=True)


def test_chapter_lead_reach():
    assert is_allowed(Operation.WRITE_ATTENDANCE, Role.CHAPTER_LEAD, Relation.DIRECT_REPORT)
    assert not is_allowed(Operation.WRITE_ATTENDANCE, Role.CHAPTER_LEAD, Relation.OTHER)
    assert not is_allowed(Operation.ALLOCATE_ATTENDANCE, Role.CHAPTER_LEAD, Relation.SELF)
    assert is_allowed(Operation.VIEW_CAPACITY, Role.CHAPTER_LEAD, Relation.NONE)
    assert not is_allowed(Operation.EDIT_CAPACITY, Role.CHAPTER_LEAD, Relation.NONE)


def test_profile_updates_are_self_only_below_tribe_lead():
    assert is_allowed(Operation.UPDATE_PROFILE, Role.REPORTER, Relation.SELF)
    assert not is_allowed(Operation.UPDATE_PROFILE, Role.CHAPTER_LEAD, Relation.DIRECT_REPORT)
    assert not is_allowed(Operation.UPDATE_PROFILE, Role.REPORTER, Relation.OTHER, delegated=True)
    assert is_allowed(Operation.UPDATE_PROFILE, Role.TRIBE_LEAD, Relation.OTHER)
