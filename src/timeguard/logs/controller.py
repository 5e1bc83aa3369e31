from __future__ import annotations

import csv
import io

from flask import Flask, g, jsonify, request

from ..common.http import admin_required, login_required
from ..container import Container

CSV_FIELDS = ["id", "user_id", "user_name", "timestamp", "type", "ip", "latitude", "longitude", "location_error"]


def register(app: Flask, container: Container) -> None:
    @app.route("/api/logs", methods=["GET"], endpoint="list_logs")
    @login_required
    async def list_logs():
        """Admins see every entry; employees only their own."""
        user = g.current_user
        limit = request.args.get("limit", type=int)
        entries = await container.audit_log_service.list_logs(
            user_id=None if user.is_admin else user.id,
            limit=limit,
        )
        return jsonify([e.to_record() for e in entries])

    @app.route("/admin/logs.csv", methods=["GET"], endpoint="admin_logs_csv")
    @admin_required
    async def admin_logs_csv():
        entries = await container.audit_log_service.list_logs()

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for e in entries:
            writer.writerow(
                {
                    "id": e.id,
                    "user_id": e.user_id,
                    "user_name": e.user_name,
                    "timestamp": e.timestamp.isoformat(),
                    "type": e.kind.value,
                    "ip": e.ip,
                    "latitude": e.location.latitude if e.location else "",
                    "longitude": e.location.longitude if e.location else "",
                    "location_error": e.location_error or "",
                }
            )

        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance_logs.csv"},
        )
