"""Declarative access policy.

Every authorization decision in the package is a lookup in ``POLICY``:
``(operation, role) -> relations allowed``. Delegation swaps the acting role
for TRIBE_LEAD, but only for ``DELEGABLE_OPERATIONS``; everything else is
decided on the principal's own role.
"""

from __future__ import annotations

from ..core.enums import Operation, Relation, Role

_ANY_TARGET = frozenset({Relation.SELF, Relation.DIRECT_REPORT, Relation.OTHER})
_NO_TARGET = frozenset({Relation.NONE})
_DENY: frozenset[Relation] = frozenset()

ROLE_ORDER: tuple[Role, ...] = (Role.REPORTER, Role.CHAPTER_LEAD, Role.TRIBE_LEAD)

POLICY: dict[tuple[Operation, Role], frozenset[Relation]] = {
    (Operation.READ_ATTENDANCE, Role.REPORTER): frozenset({Relation.SELF}),
    (Operation.READ_ATTENDANCE, Role.CHAPTER_LEAD): frozenset({Relation.SELF, Relation.DIRECT_REPORT}),
    (Operation.READ_ATTENDANCE, Role.TRIBE_LEAD): _ANY_TARGET,
    (Operation.WRITE_ATTENDANCE, Role.REPORTER): frozenset({Relation.SELF}),
    (Operation.WRITE_ATTENDANCE, Role.CHAPTER_LEAD): frozenset({Relation.SELF, Relation.DIRECT_REPORT}),
    (Operation.WRITE_ATTENDANCE, Role.TRIBE_LEAD): _ANY_TARGET,
    # Self-allocation is rejected before the policy is consulted.
    (Operation.ALLOCATE_ATTENDANCE, Role.REPORTER): _DENY,
    (Operation.ALLOCATE_ATTENDANCE, Role.CHAPTER_LEAD): frozenset({Relation.DIRECT_REPORT}),
    (Operation.ALLOCATE_ATTENDANCE, Role.TRIBE_LEAD): frozenset({Relation.DIRECT_REPORT, Relation.OTHER}),
    (Operation.DELETE_ATTENDANCE, Role.REPORTER): frozenset({Relation.SELF}),
    (Operation.DELETE_ATTENDANCE, Role.CHAPTER_LEAD): frozenset({Relation.SELF}),
    (Operation.DELETE_ATTENDANCE, Role.TRIBE_LEAD): _ANY_TARGET,
    (Operation.VIEW_CAPACITY, Role.REPORTER): _DENY,
    (Operation.VIEW_CAPACITY, Role.CHAPTER_LEAD): _NO_TARGET,
    (Operation.VIEW_CAPACITY, Role.TRIBE_LEAD): _NO_TARGET,
    (Operation.VIEW_HIERARCHY, Role.REPORTER): _DENY,
    (Operation.VIEW_HIERARCHY, Role.CHAPTER_LEAD): _NO_TARGET,
    (Operation.VIEW_HIERARCHY, Role.TRIBE_LEAD): _NO_TARGET,
    (Operation.EDIT_CAPACITY, Role.TRIBE_LEAD): _NO_TARGET,
    (Operation.MANAGE_DELEGATIONS, Role.TRIBE_LEAD): _NO_TARGET,
    (Operation.MANAGE_USERS, Role.TRIBE_LEAD): _NO_TARGET | _ANY_TARGET,
    (Operation.CHANGE_ROLES, Role.TRIBE_LEAD): _NO_TARGET | _ANY_TARGET,
    (Operation.UPDATE_PROFILE, Role.REPORTER): frozenset({Relation.SELF}),
    (Operation.UPDATE_PROFILE, Role.CHAPTER_LEAD): frozenset({Relation.SELF}),
    (Operation.UPDATE_PROFILE, Role.TRIBE_LEAD): _ANY_TARGET,
    (Operation.RESET_STATISTICS, Role.TRIBE_LEAD): _NO_TARGET,
}

DELEGABLE_OPERATIONS = frozenset(
    {
        Operation.READ_ATTENDANCE,
        Operation.WRITE_ATTENDANCE,
        Operation.ALLOCATE_ATTENDANCE,
    }
)

DENIAL_MESSAGES = {
    Operation.READ_ATTENDANCE: "You do not have permission to access this user's attendance",
    Operation.WRITE_ATTENDANCE: "You do not have permission to allocate attendance for this user",
    Operation.ALLOCATE_ATTENDANCE: "You do not have permission to allocate attendance for this user",
    Operation.DELETE_ATTENDANCE: "Only the record owner or the Tribe Lead can delete this record",
    Operation.VIEW_CAPACITY: "Office capacity is visible to Chapter Leads and the Tribe Lead only",
    Operation.VIEW_HIERARCHY: "Insufficient permissions",
    Operation.EDIT_CAPACITY: "Only the Tribe Lead can update capacity",
    Operation.MANAGE_DELEGATIONS: "Only the Tribe Lead can manage delegations",
    Operation.MANAGE_USERS: "Only the Tribe Lead can manage users",
    Operation.CHANGE_ROLES: "Only the Tribe Lead can change roles",
    Operation.UPDATE_PROFILE: "You can only update your own profile",
    Operation.RESET_STATISTICS: "Only the Tribe Lead can reset statistics",
}


def role_rank(role: Role) -> int:
    return ROLE_ORDER.index(Role(role))


def compare_roles(left: Role, right: Role) -> int:
    """-1, 0 or 1, like a classic ``cmp``."""
    a, b = role_rank(left), role_rank(right)
    return (a > b) - (a < b)


def role_at_least(role: Role, minimum: Role) -> bool:
    return role_rank(role) >= role_rank(minimum)


def is_allowed(operation: Operation, role: Role, relation: Relation, *, delegated: bool = False) -> bool:
    if relation in POLICY.get((operation, role), _DENY):
        return True
    if delegated and operation in DELEGABLE_OPERATIONS:
        return relation in POLICY.get((operation, Role.TRIBE_LEAD), _DENY)
    return False
