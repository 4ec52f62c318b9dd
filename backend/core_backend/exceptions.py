"""
Typed failures raised by the service layer and their HTTP mapping.

Services raise NotFound / Conflict / InvalidArgument / InactiveEntity and never
build responses themselves. The DRF exception handler below turns them into a
consistent error body:

    {"error": "Resource not found", "details": "...", "timestamp": "..."}
"""
import logging

from django.conf import settings
from django.utils import timezone
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class OperationError(Exception):
    """Base class for failures surfaced to the caller."""

    status_code = status.HTTP_400_BAD_REQUEST
    error = "Operation failed"

    def __init__(self, message=None):
        self.message = message or self.error
        super().__init__(self.message)


class NotFound(OperationError):
    """A referenced transaction, staff member, table or request does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    error = "Resource not found"


class Conflict(OperationError):
    """The current state of the referenced entities forbids the operation."""

    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class InactiveEntity(Conflict):
    """The referenced entity exists but is not active."""

    error = "Inactive entity"


class InvalidArgument(OperationError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid argument"


def operations_exception_handler(exc, context):
    """
    DRF exception handler.

    OperationError subclasses map to their status code, DRF's own exceptions
    keep the default handling, and anything else becomes a logged 500.
    """
    if isinstance(exc, OperationError):
        if isinstance(exc, Conflict):
            logger.info(f"Conflict in {_view_name(context)}: {exc.message}")
        return Response(
            {
                "error": exc.error,
                "details": exc.message,
                "timestamp": timezone.now().isoformat(),
            },
            status=exc.status_code,
        )

    response = exception_handler(exc, context)
    if response is not None:
        return response

    logger.error(f"Unhandled exception in {_view_name(context)}: {exc}", exc_info=True)
    details = (
        str(exc)
        if settings.DEBUG
        else "An unexpected error occurred. Please try again later."
    )
    return Response(
        {
            "error": "Internal server error",
            "details": details,
            "timestamp": timezone.now().isoformat(),
        },
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )


def _view_name(context):
    view = (context or {}).get("view")
    return view.__class__.__name__ if view is not None else "unknown view"
