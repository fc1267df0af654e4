from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_principal, date_arg, int_arg, json_body
from ..core.constants import DEFAULT_WEEK_OFFSET_LIMIT
from ..container import Container
from .model import AllocationCommand, AttendanceCommand


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="attendance_list")
    def attendance_list():
        user = current_principal(container.directory)
        records = service.list_records(
            user,
            user_id=request.args.get("userId") or None,
            chapter_lead_id=request.args.get("chapterLeadId") or None,
            start_date=date_arg("startDate"),
            end_date=date_arg("endDate"),
            status=request.args.get("status") or None,
        )
        return jsonify([r.to_dict() for r in records])

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_upsert")
    def attendance_upsert():
        user = current_principal(container.directory)
        command = AttendanceCommand.from_payload(json_body(), default_user_id=user.user_id)
        record = service.submit(user, command)
        return jsonify(record.to_dict()), 201

    @app.route("/api/attendance/allocate", methods=["POST"], endpoint="attendance_allocate")
    def attendance_allocate():
        user = current_principal(container.directory)
        command = AllocationCommand.from_payload(json_body())
        result = service.allocate_command(user, command)
        return jsonify(result.to_dict()), 201

    @app.route("/api/attendance/week", methods=["GET"], endpoint="attendance_week")
    def attendance_week():
        user = current_principal(container.directory)
        limit = int(app.config.get("WEEK_OFFSET_LIMIT", DEFAULT_WEEK_OFFSET_LIMIT))
        week = service.week(
            user,
            reference_date=date_arg("date"),
            week_offset=int_arg("weekOffset", 0, limit=limit),
        )
        week["records"] = [r.to_dict() for r in week["records"]]
        return jsonify(week)

    @app.route("/api/attendance/<int:record_id>", methods=["GET"], endpoint="attendance_get")
    def attendance_get(record_id: int):
        user = current_principal(container.directory)
        return jsonify(service.get(user, record_id=record_id).to_dict())

    @app.route("/api/attendance/<int:record_id>", methods=["DELETE"], endpoint="attendance_delete")
    def attendance_delete(record_id: int):
        user = current_principal(container.directory)
        service.delete(user, record_id=record_id)
        return jsonify({"message": "Attendance record deleted successfully"})
