"""
Project-wide DRF exception handler.

Maps domain errors raised by the store to 400 responses with field-level
detail and turns anything DRF does not recognise into a logged, generic 500.
"""

import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .moderation import InvalidTransition
from .storage import DuplicateEmailError
from .uploads import PhotoValidationError

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Something went wrong. Please try again later."


def api_exception_handler(exc, context):
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, DuplicateEmailError):
        return Response({"email": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, InvalidTransition):
        return Response({"status": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, PhotoValidationError):
        return Response({"profile_photo": [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, DjangoValidationError):
        detail = exc.message_dict if hasattr(exc, "error_dict") else {"detail": exc.messages}
        return Response(detail, status=status.HTTP_400_BAD_REQUEST)

    view = context.get("view")
    logger.error(
        "Unhandled error in %s: %s",
        view.__class__.__name__ if view else "unknown view",
        exc,
        exc_info=exc,
    )
    return Response({"detail": GENERIC_ERROR}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)
