from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_principal, json_body
from ..container import Container
from .model import NewDelegation


def register(app: Flask, container: Container) -> None:
    service = container.delegation_service

    @app.route("/api/delegations", methods=["GET"], endpoint="delegations_list")
    def delegations_list():
        user = current_principal(container.directory)
        return jsonify([d.to_dict() for d in service.list_delegations(user)])

    @app.route("/api/delegations", methods=["POST"], endpoint="delegations_create")
    def delegations_create():
        user = current_principal(container.directory)
        request_data = NewDelegation.from_payload(json_body())
        delegation = service.create_delegation(
            user,
            delegate_id=request_data.delegate_id,
            start_date=request_data.start_date,
            end_date=request_data.end_date,
        )
        return jsonify(delegation.to_dict()), 201

    @app.route("/api/delegations/<int:delegation_id>", methods=["DELETE"], endpoint="delegations_revoke")
    def delegations_revoke(delegation_id: int):
        user = current_principal(container.directory)
        delegation = service.revoke(user, delegation_id=delegation_id)
        return jsonify({"message": "Delegation revoked", "delegation": delegation.to_dict()})

    @app.route("/api/delegations/active", methods=["GET"], endpoint="delegations_active")
    def delegations_active():
        user = current_principal(container.directory)
        return jsonify(service.active_status(user))
