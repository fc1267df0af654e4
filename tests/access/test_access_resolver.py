from __future__ import annotations

from datetime import date

import pytest

from office_presence.core.enums import Operation
from office_presence.core.exceptions import AuthorizationError, NotFoundError, ValidationError

ALL_USERS = {"tl", "cl-1", "cl-2", "r-1", "r-2", "r-3", "r-4"}


def _delegate(container, user, delegate_id, start=date(2025, 1, 1), end=date(2025, 1, 31)):
    return container.delegation_service.create_delegation(
        user("tl"), delegate_id=delegate_id, start_date=start, end_date=end
    )


def test_read_set_per_role(container, user):
    resolver = container.resolver

    assert resolver.accessible_read_set(user("tl")) == ALL_USERS
    assert resolver.accessible_read_set(user("cl-1")) == {"cl-1", "r-1", "r-2"}
    assert resolver.accessible_read_set(user("cl-2")) == {"cl-2", "r-3"}
    assert resolver.accessible_read_set(user("r-1")) == {"r-1"}


def test_chapter_lead_of_nobody_sees_only_self(container, repos, user):
    repos["users_repo"].set_manager("r-3", None)
    assert container.resolver.accessible_read_set(user("cl-2")) == {"cl-2"}


def test_effective_delegation_widens_read_set_to_everyone(container, user):
    _delegate(container, user, "r-1")
    assert container.resolver.accessible_read_set(user("r-1")) == ALL_USERS


def test_delegation_outside_window_grants_nothing(container, user, clock):
    _delegate(container, user, "r-1", start=date(2025, 1, 1), end=date(2025, 1, 5))
    clock.today = date(2025, 1, 6)

    assert container.resolver.accessible_read_set(user("r-1")) == {"r-1"}
    assert container.resolver.can_act_on_behalf_of(user("r-1"), "r-3") is False


def test_delegation_window_is_inclusive_on_both_ends(container, user):
    _delegate(container, user, "r-1", start=date(2025, 1, 2), end=date(2025, 1, 7))
    resolver = container.resolver

    assert resolver.is_delegated(user("r-1"), at=date(2025, 1, 2))
    assert resolver.is_delegated(user("r-1"), at=date(2025, 1, 7))
    assert not resolver.is_delegated(user("r-1"), at=date(2025, 1, 1))
    assert not resolver.is_delegated(user("r-1"), at=date(2025, 1, 8))


def test_revoked_delegation_grants_nothing(container, user):
    delegation = _delegate(container, user, "r-1")
    container.delegation_service.revoke(user("tl"), delegation_id=delegation.delegation_id)

    assert container.resolver.accessible_read_set(user("r-1")) == {"r-1"}


def test_can_act_on_behalf_of(container, user):
    resolver = container.resolver

    assert resolver.can_act_on_behalf_of(user("r-1"), "r-1")
    assert not resolver.can_act_on_behalf_of(user("r-1"), "r-2")
    assert resolver.can_act_on_behalf_of(user("cl-1"), "r-1")
    assert not resolver.can_act_on_behalf_of(user("cl-1"), "r-3")
    assert resolver.can_act_on_behalf_of(user("tl"), "r-4")

    _delegate(container, user, "r-2")
    assert resolver.can_act_on_behalf_of(user("r-2"), "r-3")


def test_write_reach_to_unknown_user_is_not_found(container, user):
    resolver = container.resolver

    with pytest.raises(NotFoundError):
        resolver.authorize_write(user("tl"), "ghost")
    with pytest.raises(NotFoundError):
        resolver.can_act_on_behalf_of(user("r-1"), "ghost")

    _delegate(container, user, "r-1")
    with pytest.raises(NotFoundError):
        resolver.can_act_on_behalf_of(user("r-1"), "ghost")


def test_write_reach_follows_the_policy_table(container, user):
    resolver = container.resolver

    assert resolver.can_act_on_behalf_of(user("tl"), "cl-2")
    assert not resolver.can_act_on_behalf_of(user("cl-1"), "cl-2")
    assert not resolver.can_act_on_behalf_of(user("r-4"), "tl")


def test_external_aliases(container, user):
    resolver = container.resolver
    assert resolver.resolve_access(user("cl-2")) == {"cl-2", "r-3"}
    assert resolver.authorize_write(user("cl-2"), "r-3") is True
    assert resolver.authorize_write(user("cl-2"), "r-1") is False


def test_narrow_to_inaccessible_user_is_forbidden(container, user):
    with pytest.raises(AuthorizationError):
        container.resolver.narrow(user("cl-1"), user_id="r-3")


def test_narrow_to_unknown_user_is_not_found(container, user):
    with pytest.raises(NotFoundError):
        container.resolver.narrow(user("cl-1"), user_id="nobody")


def test_narrow_by_chapter_lead(container, user):
    resolver = container.resolver

    assert resolver.narrow(user("tl"), chapter_lead_id="cl-1") == {"cl-1", "r-1", "r-2"}
    assert resolver.narrow(user("cl-1"), chapter_lead_id="cl-1") == {"cl-1", "r-1", "r-2"}

    with pytest.raises(AuthorizationError):
        resolver.narrow(user("cl-1"), chapter_lead_id="cl-2")
    with pytest.raises(ValidationError):
        resolver.narrow(user("tl"), chapter_lead_id="r-1")
    with pytest.raises(NotFoundError):
        resolver.narrow(user("tl"), chapter_lead_id="ghost")


def test_delegation_never_unlocks_administrative_operations(container, user):
    _delegate(container, user, "r-1")
    resolver = container.resolver

    for operation in (
        Operation.EDIT_CAPACITY,
        Operation.MANAGE_USERS,
        Operation.CHANGE_ROLES,
        Operation.RESET_STATISTICS,
        Operation.MANAGE_DELEGATIONS,
        Operation.VIEW_CAPACITY,
    ):
        with pytest.raises(AuthorizationError):
            resolver.require_role_operation(operation, user("r-1"))

    with pytest.raises(AuthorizationError):
        resolver.authorize(Operation.DELETE_ATTENDANCE, user("r-1"), "r-3")


def test_authorize_returns_target(container, user):
    target = container.resolver.authorize(Operation.WRITE_ATTENDANCE, user("cl-1"), "r-2")
    assert target.user_id == "r-2"
