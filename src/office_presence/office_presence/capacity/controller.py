from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_principal, date_arg, int_arg, json_body
from ..core.constants import DEFAULT_WEEK_OFFSET_LIMIT
from ..container import Container
from .model import CapacityUpdate


def register(app: Flask, container: Container) -> None:
    service = container.capacity_service

    @app.route("/api/office-capacity", methods=["GET"], endpoint="capacity_week")
    def capacity_week():
        user = current_principal(container.directory)
        limit = int(app.config.get("WEEK_OFFSET_LIMIT", DEFAULT_WEEK_OFFSET_LIMIT))
        week = service.view_week(
            user,
            reference_date=date_arg("date"),
            week_offset=int_arg("weekOffset", 0, limit=limit),
        )
        return jsonify(
            {
                "week_start": week[0].day.isoformat(),
                "week_end": week[-1].day.isoformat(),
                "days": [d.to_dict() for d in week],
                "capacity_settings": [c.to_dict() for c in service.list_capacity(user)],
            }
        )

    @app.route("/api/office-capacity", methods=["PUT"], endpoint="capacity_update")
    def capacity_update():
        user = current_principal(container.directory)
        update = CapacityUpdate.from_payload(json_body())
        row = service.update_capacity(user, weekday=update.weekday, capacity=update.capacity)
        return jsonify(row.to_dict())
