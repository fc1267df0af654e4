from __future__ import annotations

from datetime import date

import pytest

from office_presence.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from office_presence.delegations.model import NewDelegation


def test_tribe_lead_creates_delegation(container, user):
    delegation = container.delegation_service.create_delegation(
        user("tl"), delegate_id="r-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 7)
    )

    assert delegation.delegator_id == "tl"
    assert delegation.delegate_id == "r-1"
    assert delegation.is_active
    assert container.delegation_service.active_delegation_for("r-1") == delegation


def test_new_delegation_replaces_the_active_one(container, repos, user):
    service = container.delegation_service
    first = service.create_delegation(
        user("tl"), delegate_id="r-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 7)
    )
    second = service.create_delegation(
        user("tl"), delegate_id="r-1", start_date=date(2025, 1, 2), end_date=date(2025, 1, 9)
    )

    assert repos["delegations_repo"].active_count("r-1") == 1
    assert repos["delegations_repo"].get_by_id(first.delegation_id).is_active is False
    assert service.active_delegation_for("r-1") == second


@pytest.mark.parametrize("actor_id", ["cl-1", "r-1"])
def test_only_tribe_lead_may_delegate(container, user, actor_id):
    with pytest.raises(AuthorizationError):
        container.delegation_service.create_delegation(
            user(actor_id), delegate_id="r-2", start_date=date(2025, 1, 1), end_date=date(2025, 1, 7)
        )


def test_delegate_cannot_redelegate(container, user):
    service = container.delegation_service
    service.create_delegation(user("tl"), delegate_id="r-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 31))

    with pytest.raises(AuthorizationError):
        service.create_delegation(
            user("r-1"), delegate_id="r-2", start_date=date(2025, 1, 1), end_date=date(2025, 1, 7)
        )


@pytest.mark.parametrize(
    "start,end",
    [(date(2025, 1, 7), date(2025, 1, 1)), (date(2025, 1, 7), date(2025, 1, 7))],
)
def test_start_must_precede_end(container, user, start, end):
    with pytest.raises(ValidationError):
        container.delegation_service.create_delegation(user("tl"), delegate_id="r-1", start_date=start, end_date=end)


def test_unknown_delegate_and_self_delegation(container, user):
    service = container.delegation_service
    with pytest.raises(NotFoundError):
        service.create_delegation(user("tl"), delegate_id="ghost", start_date=date(2025, 1, 1), end_date=date(2025, 1, 2))
    with pytest.raises(ValidationError):
        service.create_delegation(user("tl"), delegate_id="tl", start_date=date(2025, 1, 1), end_date=date(2025, 1, 2))


def test_revoke_is_idempotent(container, user):
    service = container.delegation_service
    delegation = service.create_delegation(
        user("tl"), delegate_id="r-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 7)
    )

    revoked = service.revoke(user("tl"), delegation_id=delegation.delegation_id)
    again = service.revoke(user("tl"), delegation_id=delegation.delegation_id)

    assert revoked.is_active is False
    assert again == revoked
    assert service.active_delegation_for("r-1") is None


def test_revoke_missing_and_by_non_tribe_lead(container, user):
    service = container.delegation_service
    with pytest.raises(NotFoundError):
        service.revoke(user("tl"), delegation_id=999)

    delegation = service.create_delegation(
        user("tl"), delegate_id="r-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 7)
    )
    with pytest.raises(AuthorizationError):
        service.revoke(user("r-1"), delegation_id=delegation.delegation_id)


def test_active_status_and_listing(container, user):
    service = container.delegation_service
    assert service.active_status(user("r-2")) == {"has_active_delegation": False, "delegation": None}

    older = service.create_delegation(user("tl"), delegate_id="r-1", start_date=date(2025, 1, 1), end_date=date(2025, 1, 9))
    newer = service.create_delegation(user("tl"), delegate_id="r-2", start_date=date(2025, 1, 1), end_date=date(2025, 1, 9))

    status = service.active_status(user("r-2"))
    assert status["has_active_delegation"] is True
    assert status["delegation"]["delegate_id"] == "r-2"
    assert [d.delegation_id for d in service.list_delegations(user("tl"))] == [newer.delegation_id, older.delegation_id]


def test_new_delegation_payload():
    parsed = NewDelegation.from_payload({"delegateId": "r-1", "startDate": "2025-01-01", "endDate": "2025-01-07"})
    assert parsed == NewDelegation("r-1", date(2025, 1, 1), date(2025, 1, 7))

    with pytest.raises(ValidationError):
        NewDelegation.from_payload({"delegateId": "r-1", "startDate": "2025-01-01"})
    with pytest.raises(ValidationError):
        NewDelegation.from_payload({"delegateId": "r-1", "startDate": "01/01/2025", "endDate": "2025-01-07"})
