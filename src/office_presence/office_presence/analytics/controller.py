from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_principal, date_arg, int_arg
from ..core.constants import DEFAULT_OCCUPANCY_DAYS, DEFAULT_PATTERN_DAYS
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.analytics_service

    @app.route("/api/analytics/occupancy", methods=["GET"], endpoint="analytics_occupancy")
    def analytics_occupancy():
        user = current_principal(container.directory)
        return jsonify(service.occupancy(user, start_date=date_arg("startDate"), end_date=date_arg("endDate")))

    @app.route("/api/analytics/weekly-pattern", methods=["GET"], endpoint="analytics_weekly_pattern")
    def analytics_weekly_pattern():
        user = current_principal(container.directory)
        return jsonify(service.weekly_pattern(user, days=int_arg("days", DEFAULT_PATTERN_DAYS, limit=366)))

    @app.route("/api/analytics/overview", methods=["GET"], endpoint="analytics_overview")
    def analytics_overview():
        user = current_principal(container.directory)
        return jsonify(service.overview(user, days=int_arg("days", DEFAULT_OCCUPANCY_DAYS, limit=366)))
