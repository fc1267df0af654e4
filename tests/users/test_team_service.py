from __future__ import annotations

import pytest

from office_presence.core.exceptions import AuthorizationError


def test_reporter_cannot_view_hierarchy(container, user):
    with pytest.raises(AuthorizationError):
        container.team_service.hierarchy(user("r-1"))


def test_tribe_lead_hierarchy(container, user):
    tree = container.team_service.hierarchy(user("tl"))

    assert tree["tribe_lead"]["id"] == "tl"
    assert tree["total_chapter_leads"] == 2
    assert tree["total_reporters"] == 3
    assert tree["total_users"] == 7
    carl = next(entry for entry in tree["chapter_leads"] if entry["id"] == "cl-1")
    assert [r["id"] for r in carl["direct_reports"]] == ["r-1", "r-2"]


def test_chapter_lead_hierarchy_is_own_team(container, user):
    tree = container.team_service.hierarchy(user("cl-2"))

    assert tree["total_chapter_leads"] == 1
    assert tree["chapter_leads"][0]["id"] == "cl-2"
    assert tree["total_reporters"] == 1


def test_my_team_per_role(container, user):
    teams = container.team_service

    reporter_view = teams.my_team(user("r-1"))
    assert reporter_view["chapter_lead"]["id"] == "cl-1"
    assert {m["id"] for m in reporter_view["team_members"]} == {"cl-1", "r-1", "r-2"}

    assert teams.my_team(user("r-4")) == {"chapter_lead": None, "team_members": [], "total_members": 0}

    lead_view = teams.my_team(user("cl-1"))
    assert [m["id"] for m in lead_view["team_members"]] == ["r-1", "r-2"]

    tribe_view = teams.my_team(user("tl"))
    assert tribe_view["total_members"] == 6
    no_lead = [g for g in tribe_view["teams_by_chapter_lead"] if g["chapter_lead"] is None]
    assert {m["id"] for g in no_lead for m in g["members"]} == {"cl-1", "cl-2", "r-4"}
