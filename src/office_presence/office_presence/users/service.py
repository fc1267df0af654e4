from __future__ import annotations

import logging
import uuid
from typing import Optional, Sequence

from ..access.resolver import AccessResolver
from ..common.validators import require_email, require_non_empty
from ..core.enums import Operation, Role
from ..core.exceptions import AuthorizationError, ConflictError, NotFoundError, ValidationError
from .directory import HierarchyDirectory
from .model import Principal, User
from .repository import UserRepository

logger = logging.getLogger(__name__)

_UNCHANGED = object()


class UserService:
    """Use case: user lifecycle (Tribe Lead only, never via delegation).

    The organisation has exactly one Tribe Lead; creating or promoting a
    second one is refused with ``ConflictError``.
    """

    def __init__(self, users: UserRepository, directory: HierarchyDirectory, resolver: AccessResolver):
        self._users = users
        self._directory = directory
        self._resolver = resolver

    def _require_chapter_lead(self, manager_id: Optional[str]) -> Optional[str]:
        if not manager_id:
            return None
        manager = self._directory.find_user(manager_id)
        if not manager:
            raise NotFoundError("Chapter Lead not found")
        if manager.role != Role.CHAPTER_LEAD:
            raise ValidationError("A Reporter's manager must be a Chapter Lead")
        return manager.user_id

    def _require_no_other_tribe_lead(self, user_id: Optional[str] = None) -> None:
        current = self._directory.tribe_lead()
        if current and current.user_id != user_id:
            raise ConflictError("The organisation already has a Tribe Lead")

    def list_users(self, actor: Principal) -> Sequence[User]:
        visible = self._resolver.accessible_read_set(actor)
        return [u for u in self._directory.all_users() if u.user_id in visible]

    def get_user(self, actor: Principal, *, user_id: str) -> User:
        self._resolver.narrow(actor, user_id=user_id)
        return self._directory.get_user(user_id)

    def create_user(
        self,
        actor: Principal,
        *,
        name: str,
        email: str,
        role: Role = Role.REPORTER,
        manager_id: Optional[str] = None,
    ) -> User:
        self._resolver.require_role_operation(Operation.MANAGE_USERS, actor)

        name = require_non_empty(name, "Name")
        email = require_email(email)
        role = Role(role)

        if self._users.get_by_email(email):
            raise ValidationError("A user with this email already exists")
        if role == Role.TRIBE_LEAD:
            self._require_no_other_tribe_lead()

        manager_id = self._require_chapter_lead(manager_id) if role == Role.REPORTER else None

        user = self._users.create_user(
            user_id=str(uuid.uuid4()),
            name=name,
            email=email,
            role=role,
            manager_id=manager_id,
        )
        logger.info("User %s (%s) created by %s", user.user_id, role.value, actor.user_id)
        return user

    def delete_user(self, actor: Principal, *, user_id: str) -> None:
        target = self._resolver.authorize(Operation.MANAGE_USERS, actor, user_id)
        if target.user_id == actor.user_id:
            raise ValidationError("You cannot delete your own account")

        if not self._users.delete_by_id(target.user_id):
            raise NotFoundError("Target user not found")
        logger.info("User %s deleted by %s", target.user_id, actor.user_id)

    def change_role(self, actor: Principal, *, user_id: str, role: Role) -> User:
        target = self._resolver.authorize(Operation.CHANGE_ROLES, actor, user_id)
        role = Role(role)

        if role == target.role:
            return target
        if target.user_id == actor.user_id:
            raise ValidationError("The Tribe Lead cannot change their own role")
        if role == Role.TRIBE_LEAD:
            self._require_no_other_tribe_lead(target.user_id)

        manager_id = target.manager_id if role == Role.REPORTER else None
        self._users.update_role(
            target.user_id,
            role=role,
            manager_id=manager_id,
            detach_reports=target.role == Role.CHAPTER_LEAD,
        )
        logger.info(
            "User %s role changed %s -> %s by %s",
            target.user_id,
            target.role.value,
            role.value,
            actor.user_id,
        )
        return self._directory.get_user(target.user_id)

    def assign_manager(self, actor: Principal, *, user_id: str, manager_id: Optional[str]) -> User:
        target = self._resolver.authorize(Operation.MANAGE_USERS, actor, user_id)
        if target.role != Role.REPORTER:
            raise ValidationError("Only Reporters have a Chapter Lead")

        manager_id = self._require_chapter_lead(manager_id)
        self._users.set_manager(target.user_id, manager_id)
        logger.info("User %s now reports to %s", target.user_id, manager_id)
        return self._directory.get_user(target.user_id)

    def update_profile(
        self,
        actor: Principal,
        *,
        user_id: str,
        name: Optional[str] = None,
        email: Optional[str] = None,
        team_name: Optional[str] = None,
        role: Optional[Role] = None,
        manager_id=_UNCHANGED,
    ) -> User:
        """Edit a profile: users edit their own, the Tribe Lead edits anyone.

        ``None`` leaves a field as it is; an empty ``team_name`` clears it.
        Role and Chapter Lead changes go through the Tribe Lead only paths.
        """

        target = self._resolver.authorize(Operation.UPDATE_PROFILE, actor, user_id)
        if (role is not None or manager_id is not _UNCHANGED) and actor.role != Role.TRIBE_LEAD:
            raise AuthorizationError("Only the Tribe Lead can change roles or team assignments")

        new_name = require_non_empty(name, "Name") if name is not None else target.name
        new_email = require_email(email) if email is not None else target.email
        new_team = target.team_name if team_name is None else (team_name.strip() or None)
        if new_email != target.email:
            existing = self._users.get_by_email(new_email)
            if existing and existing.user_id != target.user_id:
                raise ValidationError("A user with this email already exists")

        if role is not None:
            self.change_role(actor, user_id=target.user_id, role=role)
        if manager_id is not _UNCHANGED:
            self.assign_manager(actor, user_id=target.user_id, manager_id=manager_id)

        if (new_name, new_email, new_team) != (target.name, target.email, target.team_name):
            self._users.update_profile(target.user_id, name=new_name, email=new_email, team_name=new_team)
            logger.info("User %s profile updated by %s", target.user_id, actor.user_id)
        return self._directory.get_user(target.user_id)


class TeamService:
    """Read-only team views over the hierarchy."""

    def __init__(self, directory: HierarchyDirectory, resolver: AccessResolver):
        self._directory = directory
        self._resolver = resolver

    def _lead_entry(self, lead: User) -> dict:
        reports = self._directory.direct_reports_of(lead.user_id)
        entry = lead.to_dict()
        entry["direct_reports_count"] = len(reports)
        entry["direct_reports"] = [r.to_dict() for r in reports]
        return entry

    def hierarchy(self, actor: Principal) -> dict:
        self._resolver.require_role_operation(Operation.VIEW_HIERARCHY, actor)

        tribe_lead = self._directory.tribe_lead()
        tribe_lead_dict = tribe_lead.to_dict() if tribe_lead else None

        if actor.role == Role.CHAPTER_LEAD:
            entry = self._lead_entry(actor)
            return {
                "tribe_lead": tribe_lead_dict,
                "chapter_leads": [entry],
                "total_chapter_leads": 1,
                "total_reporters": entry["direct_reports_count"],
            }

        leads = [self._lead_entry(lead) for lead in self._directory.chapter_leads()]
        total_reporters = sum(entry["direct_reports_count"] for entry in leads)
        return {
            "tribe_lead": tribe_lead_dict,
            "chapter_leads": leads,
            "total_chapter_leads": len(leads),
            "total_reporters": total_reporters,
            "total_users": len(self._directory.all_user_ids()),
        }

    def my_team(self, actor: Principal) -> dict:
        if actor.role == Role.TRIBE_LEAD:
            groups: dict[str, dict] = {}
            members = [u for u in self._directory.all_users() if u.role != Role.TRIBE_LEAD]
            for member in members:
                key = member.manager_id or "no-lead"
                if key not in groups:
                    lead = self._directory.find_user(member.manager_id) if member.manager_id else None
                    groups[key] = {"chapter_lead": lead.to_dict() if lead else None, "members": []}
                groups[key]["members"].append(member.to_dict())
            return {"teams_by_chapter_lead": list(groups.values()), "total_members": len(members)}

        if actor.role == Role.CHAPTER_LEAD:
            reports = self._directory.direct_reports_of(actor.user_id)
            return {
                "chapter_lead": actor.to_dict(),
                "team_members": [r.to_dict() for r in reports],
                "total_members": len(reports),
            }

        lead = self._directory.find_user(actor.manager_id) if actor.manager_id else None
        if not lead:
            return {"chapter_lead": None, "team_members": [], "total_members": 0}

        team = [lead, *self._directory.direct_reports_of(lead.user_id)]
        team.sort(key=lambda u: (u.name, u.user_id))
        return {
            "chapter_lead": lead.to_dict(),
            "team_members": [u.to_dict() for u in team],
            "total_members": len(team),
        }
