from __future__ import annotations

import logging
from functools import wraps
from typing import Any, Callable

from flask import jsonify, request, session

from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError

logger = logging.getLogger(__name__)


def json_body() -> dict[str, Any]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def error_response(message: str, status: int):
    return jsonify({"msg": message}), status


def current_user_id() -> int:
    return int(session["user_id"])


def login_required(view: Callable):
    @wraps(view)
    def wrapper(*args, **kwargs):
        if "user_id" not in session:
            return error_response("Authentication required", 401)
        return view(*args, **kwargs)

    return wrapper


def require_role(role: Role) -> None:
    if session.get("role") != role.value:
        raise AuthorizationError("Access denied")


def role_required(role: Role):
    def decorator(view: Callable):
        @wraps(view)
        def wrapper(*args, **kwargs):
            if "user_id" not in session:
                return error_response("Authentication required", 401)
            try:
                require_role(role)
            except AuthorizationError as e:
                return error_response(str(e), e.status_code)
            return view(*args, **kwargs)

        return wrapper

    return decorator


admin_required = role_required(Role.ADMIN)
employee_required = role_required(Role.EMPLOYEE)


def handles_errors(failure_message: str):
    """Map domain errors to `{msg}` responses; anything else becomes a logged 500."""

    def decorator(view: Callable):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except DomainError as e:
                return error_response(str(e), e.status_code)
            except Exception:
                logger.exception("%s %s failed", request.method, request.path)
                return error_response(failure_message, 500)

        return wrapper

    return decorator
