from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import current_session
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/bootstrap", methods=["GET"], endpoint="bootstrap")
    async def bootstrap():
        """Application start: load users and logs, revalidate the stored session."""
        state = await container.session_revalidator.start(current_session())
        return jsonify(
            {
                "users": [u.to_record() for u in state.users],
                "logs": [e.to_record() for e in state.logs],
                "session_user": state.session_user.to_record() if state.session_user else None,
            }
        )

    @app.route("/api/login", methods=["POST"], endpoint="login")
    async def login():
        data = request.get_json(silent=True) or request.form
        username = data.get("username", "")
        password = data.get("password", "")

        user = await container.auth_service.login(username, password)
        current_session().save(user)
        return jsonify({"success": True, "user": user.to_record()})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    async def logout():
        current_session().clear()
        return jsonify({"success": True})
