"""
DRF exception handler.

Renders booking errors and DRF's own exceptions in one envelope:
``{"success": false, "message": ..., "errors"?: ..., "stack"?: ...}``.
Stack traces are only attached when DEBUG is on.
"""

from __future__ import annotations

import logging
import traceback

from django.conf import settings  # type: ignore
from django.utils.encoding import force_str  # type: ignore
from django.utils.translation import gettext  # type: ignore
from rest_framework import exceptions, status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.exceptions import BookingError

logger = logging.getLogger(__name__)


def _first_message(detail) -> str:
    """Pick a human readable message out of a DRF error detail structure."""
    if isinstance(detail, dict):
        for key, value in detail.items():
            message = _first_message(value)
            if key in ("detail", "non_field_errors"):
                return message
            return f"{key}: {message}"
        return ""
    if isinstance(detail, (list, tuple)):
        return _first_message(detail[0]) if detail else ""
    return force_str(detail)


def _envelope(message: str, exc: Exception, errors=None) -> dict:
    body: dict = {"success": False, "message": message}
    if errors is not None:
        body["errors"] = errors
    if settings.DEBUG:
        body["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return body


def booking_exception_handler(exc, context):
    if isinstance(exc, BookingError):
        logger.info(f"{exc.__class__.__name__}: {exc.message}")
        return Response(_envelope(gettext(force_str(exc.message)), exc), status=exc.status_code)

    response = exception_handler(exc, context)
    if response is None:
        return None

    errors = None
    if isinstance(exc, exceptions.ValidationError):
        errors = response.data
    message = _first_message(response.data)
    response.data = _envelope(message, exc, errors)
    if response.status_code == status.HTTP_401_UNAUTHORIZED:
        logger.info(f"Unauthenticated request to {context['request'].path}")
    return response
