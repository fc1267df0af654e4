from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_principal, json_body
from ..core.enums import Operation, Role
from ..core.exceptions import ValidationError
from ..container import Container


def _role(value) -> Role:
    try:
        return Role(str(value or "").upper())
    except ValueError:
        raise ValidationError("Role must be one of: reporter, chapter_lead, tribe_lead")


def register(app: Flask, container: Container) -> None:
    directory = container.directory

    @app.route("/api/users/me", methods=["GET"], endpoint="users_me")
    def users_me():
        user = current_principal(directory)
        data = user.to_dict()
        manager = directory.resolve_manager(user.user_id)
        data["manager"] = manager.to_dict() if manager else None
        data["has_active_delegation"] = container.resolver.is_delegated(user)
        return jsonify(data)

    @app.route("/api/users", methods=["GET"], endpoint="users_list")
    def users_list():
        user = current_principal(directory)
        return jsonify([u.to_dict() for u in container.user_service.list_users(user)])

    @app.route("/api/users", methods=["POST"], endpoint="users_create")
    def users_create():
        user = current_principal(directory)
        body = json_body()
        created = container.user_service.create_user(
            user,
            name=body.get("name", ""),
            email=body.get("email", ""),
            role=_role(body.get("role") or Role.REPORTER.value),
            manager_id=body.get("managerId") or body.get("manager_id"),
        )
        return jsonify(created.to_dict()), 201

    @app.route("/api/users/<user_id>", methods=["GET"], endpoint="users_get")
    def users_get(user_id: str):
        user = current_principal(directory)
        return jsonify(container.user_service.get_user(user, user_id=user_id).to_dict())

    @app.route("/api/users/<user_id>", methods=["PATCH"], endpoint="users_update")
    def users_update(user_id: str):
        user = current_principal(directory)
        body = json_body()
        changes = {}
        if body.get("role") is not None:
            changes["role"] = _role(body["role"])
        for key in ("managerId", "manager_id"):
            if key in body:
                changes["manager_id"] = body[key] or None
        updated = container.user_service.update_profile(
            user,
            user_id=user_id,
            name=body.get("name"),
            email=body.get("email"),
            team_name=body.get("teamName", body.get("team_name")),
            **changes,
        )
        return jsonify(updated.to_dict())

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="users_delete")
    def users_delete(user_id: str):
        user = current_principal(directory)
        container.user_service.delete_user(user, user_id=user_id)
        return jsonify({"message": "User deleted successfully"})

    @app.route("/api/users/<user_id>/role", methods=["PATCH"], endpoint="users_change_role")
    def users_change_role(user_id: str):
        user = current_principal(directory)
        updated = container.user_service.change_role(user, user_id=user_id, role=_role(json_body().get("role")))
        return jsonify(updated.to_dict())

    @app.route("/api/users/<user_id>/manager", methods=["PUT"], endpoint="users_assign_manager")
    def users_assign_manager(user_id: str):
        user = current_principal(directory)
        body = json_body()
        updated = container.user_service.assign_manager(
            user,
            user_id=user_id,
            manager_id=body.get("managerId") or body.get("manager_id"),
        )
        return jsonify(updated.to_dict())

    @app.route("/api/users/<user_id>/reports", methods=["GET"], endpoint="users_reports")
    def users_reports(user_id: str):
        user = current_principal(directory)
        container.resolver.authorize(Operation.READ_ATTENDANCE, user, user_id)
        reports = directory.direct_reports_of(user_id)
        return jsonify([r.to_dict() for r in reports])

    @app.route("/api/teams/hierarchy", methods=["GET"], endpoint="teams_hierarchy")
    def teams_hierarchy():
        user = current_principal(directory)
        return jsonify(container.team_service.hierarchy(user))

    @app.route("/api/teams/my-team", methods=["GET"], endpoint="teams_my_team")
    def teams_my_team():
        user = current_principal(directory)
        return jsonify(container.team_service.my_team(user))
