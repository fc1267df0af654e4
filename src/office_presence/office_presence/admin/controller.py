from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import current_principal
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/admin/reset-statistics", methods=["POST"], endpoint="admin_reset_statistics")
    def admin_reset_statistics():
        user = current_principal(container.directory)
        return jsonify(container.admin_service.reset_statistics(user))
