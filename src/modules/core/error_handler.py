"""DRF exception handler producing a single error payload shape.

Every error leaving the API looks like::

    {
        "timestamp": "2024-05-01T12:00:00+00:00",
        "status": 409,
        "error": "Conflict",
        "message": "Order ... is already cancelled."
    }

Field-level validation failures additionally carry ``details`` with the
per-field messages.  Domain errors are mapped by their kind; DRF's own
API exceptions (401/403/404/400/405/429) keep their status code.
Anything else is left to Django, which renders a 500.
"""

from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict, Optional

import structlog
from django.utils import timezone
from pydantic import ValidationError as PydanticValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from modules.core.exceptions import DomainError

logger = structlog.get_logger(__name__)


def build_error_body(
    status_code: int, message: str, details: Optional[Any] = None
) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "timestamp": timezone.now().isoformat(),
        "status": status_code,
        "error": HTTPStatus(status_code).phrase,
        "message": message,
    }
    if details is not None:
        body["details"] = details
    return body


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Translate *exc* into a structured response, or ``None`` to re-raise."""
    if isinstance(exc, DomainError):
        logger.info(
            "api.domain_error",
            error_type=exc.__class__.__name__,
            status_code=exc.status_code,
            message=exc.message,
        )
        return Response(
            build_error_body(exc.status_code, exc.message),
            status=exc.status_code,
        )

    if isinstance(exc, PydanticValidationError):
        details = [
            {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
            for err in exc.errors()
        ]
        return Response(
            build_error_body(400, "Invalid request data.", details),
            status=status.HTTP_400_BAD_REQUEST,
        )

    response = exception_handler(exc, context)
    if response is None:
        return None

    data = response.data
    if isinstance(data, dict) and set(data) == {"detail"}:
        message, details = str(data["detail"]), None
    else:
        message, details = "Invalid request data.", data
    response.data = build_error_body(response.status_code, message, details)
    return response
