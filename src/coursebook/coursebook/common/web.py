"""Helpers shared by the JSON controllers."""
from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from ..users.service import Actor, UserService

log = logging.getLogger(__name__)

API_KEY_HEADER = "X-API-Key"

_STATUS = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(message: str, status: int, error: str | None = None, **extra):
    body = {"message": message}
    if error is not None:
        body["error"] = error
    body.update(extra)
    return jsonify(body), status


def current_actor(user_service: UserService) -> Actor:
    """Resolve the caller from the API key header, else from the session."""
    api_key = request.headers.get(API_KEY_HEADER)
    if api_key:
        return user_service.resolve_actor(api_key)
    if "user_id" not in session or "client_id" not in session:
        raise AuthenticationError("Login required")
    return Actor(
        user_id=int(session["user_id"]),
        client_id=int(session["client_id"]),
        is_admin=bool(session.get("is_admin")),
        is_instructor=bool(session.get("is_instructor")),
    )


def json_view(failure_message: str):
    """Map domain exceptions raised by a view onto JSON error responses."""

    def decorate(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except PersistenceError as e:
                log.error("%s: %s", failure_message, e)
                return error_response(failure_message, 500, str(e))
            except (ValidationError, AuthenticationError, AuthorizationError, NotFoundError) as e:
                status = next(code for exc, code in _STATUS if isinstance(e, exc))
                return error_response(str(e), status)
            except Exception as e:
                log.exception(failure_message)
                return error_response(failure_message, 500, str(e))

        return wrapper

    return decorate
