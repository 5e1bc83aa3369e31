from __future__ import annotations

from flask import Flask, g, jsonify, request, send_file

from ..collaborators.geolocation import ClientGeolocation
from ..collaborators.ip_lookup import StaticIpLookup
from ..collaborators.qr import QrDecodeError, camera_error, decode_qr_image, render_qr_png
from ..common.http import admin_required, current_session, json_error, login_required
from ..container import Container
from ..core.exceptions import OperationInProgress
from .service import ToggleResult


def _location_payload(data) -> dict | None:
    """Browser geolocation sent either as a JSON object or as flat form fields."""
    if "location" in data and isinstance(data.get("location"), dict):
        return data["location"]
    if data.get("location_error"):
        return {"error": data.get("location_error")}
    if data.get("latitude") not in (None, "") and data.get("longitude") not in (None, ""):
        return {"latitude": data.get("latitude"), "longitude": data.get("longitude")}
    return None


def _result_response(result: ToggleResult):
    if result.success:
        return jsonify(
            {
                "success": True,
                "message": result.message,
                "user": result.user.to_record() if result.user else None,
                "log": result.entry.to_record() if result.entry else None,
            }
        ), 200
    status = 409 if isinstance(result.failure, OperationInProgress) else 500
    return json_error(result.message, status)


def register(app: Flask, container: Container) -> None:
    def _toggle_kwargs(data) -> dict:
        return dict(
            session=current_session(),
            geolocation=ClientGeolocation.from_payload(_location_payload(data)),
            ip_lookup=container.ip_lookup or StaticIpLookup(request.remote_addr),
        )

    @app.route("/api/attendance/toggle", methods=["POST"], endpoint="toggle_attendance")
    @login_required
    async def toggle_attendance():
        data = request.get_json(silent=True) or {}
        result = await container.attendance_service.toggle(g.current_user, **_toggle_kwargs(data))
        return _result_response(result)

    @app.route("/api/qr/checkin", methods=["POST"], endpoint="api_qr_checkin")
    @login_required
    async def api_qr_checkin():
        """Toggle with a QR payload decoded in the browser."""
        data = request.get_json(silent=True) or {}
        if data.get("camera_error"):
            err = camera_error(data.get("camera_error"))
            return jsonify({"success": False, "kind": err.kind, "message": str(err)}), 400

        result = await container.attendance_service.toggle_with_qr(
            g.current_user,
            str(data.get("code", "")),
            expected_token=app.config["QR_TOKEN"],
            **_toggle_kwargs(data),
        )
        return _result_response(result)

    @app.route("/api/qr/checkin/image", methods=["POST"], endpoint="api_qr_checkin_image")
    @login_required
    async def api_qr_checkin_image():
        """Accept an uploaded image, decode the QR code, then toggle."""
        if "image" not in request.files:
            return json_error("Missing image file", 400)

        try:
            scanned_code = decode_qr_image(request.files["image"].stream)
        except QrDecodeError as e:
            return jsonify({"success": False, "kind": e.kind, "message": str(e)}), 400

        result = await container.attendance_service.toggle_with_qr(
            g.current_user,
            scanned_code,
            expected_token=app.config["QR_TOKEN"],
            **_toggle_kwargs(request.form),
        )
        return _result_response(result)

    @app.route("/admin/qr/image", methods=["GET"], endpoint="admin_qr_image")
    @admin_required
    async def admin_qr_image():
        """Office QR code that employees scan to check in or out."""
        return send_file(render_qr_png(app.config["QR_TOKEN"]), mimetype="image/png")
