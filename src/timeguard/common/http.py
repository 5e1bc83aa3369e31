from __future__ import annotations

from functools import wraps

from flask import Flask, g, jsonify, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DataLoadFailure,
    DomainError,
    DuplicateUserId,
    DuplicateUsername,
    UserNotFound,
    ValidationError,
)
from ..sessions.store import FlaskSessionStore

# Most specific first
_STATUS_BY_ERROR = (
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (UserNotFound, 404),
    (DuplicateUsername, 409),
    (DuplicateUserId, 409),
    (ValidationError, 400),
    (DataLoadFailure, 503),
)


def current_session() -> FlaskSessionStore:
    return FlaskSessionStore(session)


def json_error(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def login_required(view):
    @wraps(view)
    async def wrapper(*args, **kwargs):
        user = current_session().load()
        if user is None:
            return json_error("Please log in to continue.", 401)
        g.current_user = user
        return await view(*args, **kwargs)

    return wrapper


def admin_required(view):
    @wraps(view)
    async def wrapper(*args, **kwargs):
        user = current_session().load()
        if user is None:
            return json_error("Please log in to continue.", 401)
        if not user.is_admin:
            return json_error("You do not have permission for this action.", 403)
        g.current_user = user
        return await view(*args, **kwargs)

    return wrapper


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                return json_error(str(e), status)
        app.logger.error("Unhandled domain error: %s", e)
        return json_error(str(e), 500)
