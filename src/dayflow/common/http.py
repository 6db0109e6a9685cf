from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, jsonify, request, session
from werkzeug.exceptions import HTTPException

from ..core.enums import Role
from ..core.exceptions import AuthenticationError, DomainError, ValidationError
from ..core.identity import Identity

logger = logging.getLogger(__name__)


def current_identity() -> Identity:
    """Identity of the signed-in caller, from the Flask session."""

    if "user_id" not in session:
        raise AuthenticationError("Authentication required")
    try:
        return Identity(user_id=int(session["user_id"]), role=Role(session.get("role")))
    except (TypeError, ValueError):
        session.clear()
        raise AuthenticationError("Authentication required")


def login_required(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        current_identity()
        return view(*args, **kwargs)

    return wrapper


def json_body() -> dict:
    if not request.get_data():
        return {}
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"error": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"error": e.description or e.name}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        if bool(current_app.config.get("DEBUG", False)):
            return jsonify({"error": str(e)}), 500
        return jsonify({"error": "Internal server error"}), 500
