from __future__ import annotations

import uuid

from flask import Flask, jsonify, request

from ..common.http import admin_required
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import User, UserPatch


def _parse_role(value, *, default=None):
    if value is None or value == "":
        return default
    try:
        return Role(value)
    except ValueError:
        raise ValidationError("Invalid role")


def _optional_str(value):
    return None if value is None else str(value)


def _parse_status(value):
    if value is None or value == "":
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise ValidationError("Invalid status")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/users", methods=["GET"], endpoint="list_users")
    @admin_required
    async def list_users():
        users = await container.directory_service.list_users()
        role = _parse_role(request.args.get("role"))
        if role is not None:
            users = [u for u in users if u.role == role]
        return jsonify([u.to_record() for u in users])

    @app.route("/api/users", methods=["POST"], endpoint="add_user")
    @admin_required
    async def add_user():
        data = request.get_json(silent=True) or {}
        candidate = User(
            id=str(data.get("id") or f"emp-{uuid.uuid4().hex[:8]}"),
            name=str(data.get("name", "")),
            username=str(data.get("username", "")),
            password=str(data.get("password", "")),
            role=_parse_role(data.get("role"), default=Role.EMPLOYEE),
            status=AttendanceStatus.CHECKED_OUT,
            last_check_in=None,
        )
        user = await container.directory_service.add_user(candidate)
        return jsonify(user.to_record()), 201

    @app.route("/api/users/<user_id>", methods=["PUT"], endpoint="update_user")
    @admin_required
    async def update_user(user_id: str):
        data = request.get_json(silent=True) or {}
        patch = UserPatch(
            id=user_id,
            name=_optional_str(data.get("name")),
            username=_optional_str(data.get("username")),
            password=_optional_str(data.get("password")) or None,
            role=_parse_role(data.get("role")),
            status=_parse_status(data.get("status")),
        )
        user = await container.directory_service.update_user(patch)
        return jsonify(user.to_record())

    @app.route("/api/users/<user_id>", methods=["DELETE"], endpoint="delete_user")
    @admin_required
    async def delete_user(user_id: str):
        await container.directory_service.delete_user(user_id)
        return jsonify({"success": True})
