from __future__ import annotations

import logging
from functools import wraps

from flask import jsonify

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DeviceAlreadyUsedBy,
    DeviceConflict,
    DomainError,
    InternalError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Most specific first: device rejections are conflicts but surface as forbidden.
_STATUS_BY_ERROR = (
    (DeviceConflict, 403),
    (DeviceAlreadyUsedBy, 403),
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
    (ConflictError, 409),
    (InternalError, 500),
)


def status_for(error: DomainError) -> int:
    for error_type, status in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def error_response(error: DomainError):
    return jsonify({"success": False, "code": error.code, "error": error.message}), status_for(error)


def internal_error_response(message: str = "Internal server error."):
    return jsonify({"success": False, "code": InternalError.code, "error": message}), 500


def json_body(request) -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object.")
    return data


def api_errors(view):
    """Render DomainError as its JSON error; log and hide anything else."""

    @wraps(view)
    def wrapper(*args, **kwargs):
        try:
            return view(*args, **kwargs)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Unhandled error in %s", view.__name__)
            return internal_error_response()

    return wrapper
