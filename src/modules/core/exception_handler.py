"""DRF exception handler.

Renders every error (domain, DRF and DTO validation) as::

    {"type": "client_error", "errors": [{"code": ..., "detail": ..., "attr": ...}]}

Domain errors are mapped to an HTTP status by their ``kind``.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

import structlog
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

from modules.core.exceptions import DomainError

logger = structlog.get_logger(__name__)

KIND_STATUS: Dict[str, int] = {
    "NotFound": status.HTTP_404_NOT_FOUND,
    "Forbidden": status.HTTP_403_FORBIDDEN,
    "InvalidState": status.HTTP_409_CONFLICT,
    "WrongMaterialType": status.HTTP_400_BAD_REQUEST,
    "InsufficientStock": status.HTTP_409_CONFLICT,
    "ValidationError": status.HTTP_400_BAD_REQUEST,
    "AlreadyExists": status.HTTP_409_CONFLICT,
}

_CAMEL = re.compile(r"(?<!^)(?=[A-Z])")


def _snake(name: str) -> str:
    return _CAMEL.sub("_", name).lower()


def _error(code: str, detail: str, attr: Optional[str] = None) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def _envelope(error_type: str, errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": error_type, "errors": errors}


def _flatten(detail: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Flatten nested DRF error details into ``attr``-addressed entries."""
    if isinstance(detail, dict):
        errors = []
        for key, value in detail.items():
            name = key if key != "non_field_errors" else None
            errors.extend(_flatten(value, f"{attr}.{name}" if attr and name else attr or name))
        return errors
    if isinstance(detail, list):
        errors = []
        for index, value in enumerate(detail):
            if isinstance(value, (dict, list)):
                errors.extend(_flatten(value, f"{attr}.{index}" if attr else str(index)))
            else:
                errors.extend(_flatten(value, attr))
        return errors
    return [_error(getattr(detail, "code", "invalid"), str(detail), attr)]


def _domain_response(exc: DomainError) -> Response:
    http_status = KIND_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST)
    error_type = "validation_error" if exc.kind == "ValidationError" else "client_error"
    attr = exc.context.get("field")
    logger.info(
        "api.domain_error",
        kind=exc.kind,
        error=type(exc).__name__,
        status_code=http_status,
        detail=str(exc),
    )
    return Response(
        _envelope(error_type, [_error(_snake(type(exc).__name__), str(exc), attr)]),
        status=http_status,
    )


def _pydantic_response(exc: PydanticValidationError) -> Response:
    errors = [
        _error(
            error["type"],
            error["msg"],
            ".".join(str(part) for part in error["loc"]) or None,
        )
        for error in exc.errors()
    ]
    return Response(_envelope("validation_error", errors), status=status.HTTP_400_BAD_REQUEST)


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    if isinstance(exc, DomainError):
        return _domain_response(exc)
    if isinstance(exc, PydanticValidationError):
        return _pydantic_response(exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        # Unexpected failure: let Django's 500 handling take over.
        return None

    if isinstance(exc, DRFValidationError):
        response.data = _envelope("validation_error", _flatten(exc.detail))
    else:
        detail = getattr(exc, "detail", str(exc))
        errors = _flatten(detail)
        if response.status_code >= 500:
            response.data = _envelope("server_error", errors)
        else:
            response.data = _envelope("client_error", errors)
    return response
