"""Domain exception taxonomy and the DRF exception handler.

Services raise the classes below (or the module-specific subclasses in each
module's ``exceptions.py``); views never build error responses themselves.
``api_exception_handler`` renders every failure, domain or DRF, in a single
envelope::

    {"type": "validation_error" | "client_error" | "server_error",
     "errors": [{"code": ..., "detail": ..., "attr": ...}]}

Remaneio rejections additionally carry ``invalidos`` with the offending ids.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.conf import settings
from django.db import DatabaseError
from rest_framework import exceptions as drf_exceptions
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.views import set_rollback

logger = structlog.get_logger(__name__)

VALIDATION_ERROR = "validation_error"
CLIENT_ERROR = "client_error"
SERVER_ERROR = "server_error"


# ---------------------------------------------------------------------------
# Taxonomy
# ---------------------------------------------------------------------------


class DomainError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_type = CLIENT_ERROR
    code = "error"

    def __init__(self, message: str = "", attr: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.attr = attr


class DomainValidationError(DomainError):
    """Input failed a business validation rule."""

    error_type = VALIDATION_ERROR
    code = "invalid"


class NotFoundError(DomainError):
    """A referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class ConflictError(DomainError):
    """A uniqueness rule was violated."""

    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class InvalidSequenceError(DomainValidationError):
    """A batch of ids referenced rows outside the accepted set."""

    code = "invalid_sequence"

    def __init__(self, message: str, invalid_ids: List[int]) -> None:
        super().__init__(message, attr="pedido_ids")
        self.invalid_ids = list(invalid_ids)


class StorageError(DomainError):
    """The database failed while serving the request."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_type = SERVER_ERROR
    code = "storage_error"


# ---------------------------------------------------------------------------
# DRF handler
# ---------------------------------------------------------------------------

STORAGE_ERROR_MESSAGE = "Erro interno ao acessar o banco de dados."


def api_exception_handler(exc: Exception, context: Dict[str, Any]) -> Optional[Response]:
    """Translate domain, database and DRF errors into the standard envelope."""
    if isinstance(exc, DatabaseError):
        view = context.get("view")
        logger.error(
            "storage.failure",
            view=view.__class__.__name__ if view else None,
            exc_info=exc,
        )
        detail = STORAGE_ERROR_MESSAGE
        if settings.DEBUG:
            detail = f"{STORAGE_ERROR_MESSAGE} {exc}"
        exc = StorageError(detail)

    if isinstance(exc, DomainError):
        set_rollback()
        body = _envelope(
            exc.error_type,
            [_error(exc.code, exc.message, exc.attr)],
        )
        if isinstance(exc, InvalidSequenceError):
            body["invalidos"] = exc.invalid_ids
        return Response(body, status=exc.status_code)

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, drf_exceptions.ValidationError):
        errors = _flatten(exc.get_full_details())
        response.data = _envelope(VALIDATION_ERROR, errors)
    elif isinstance(exc, drf_exceptions.APIException):
        full = exc.get_full_details()
        errors = _flatten(full) if not _is_leaf(full) else [
            _error(full["code"], full["message"], None)
        ]
        error_type = SERVER_ERROR if response.status_code >= 500 else CLIENT_ERROR
        response.data = _envelope(error_type, errors)
    return response


def _envelope(error_type: str, errors: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": error_type, "errors": errors}


def _error(code: str, detail: str, attr: Optional[str]) -> Dict[str, Any]:
    return {"code": code, "detail": detail, "attr": attr}


def _is_leaf(value: Any) -> bool:
    return isinstance(value, dict) and set(value) == {"message", "code"}


def _flatten(details: Any, attr: Optional[str] = None) -> List[Dict[str, Any]]:
    """Walk DRF's nested ``get_full_details()`` output into flat errors.

    Nested keys are joined with ``.`` (``itens.0.quantidade``).
    """
    if _is_leaf(details):
        return [_error(str(details["code"]), str(details["message"]), attr)]
    errors: List[Dict[str, Any]] = []
    if isinstance(details, dict):
        for key, value in details.items():
            child = None if key == "non_field_errors" else str(key)
            if attr and child:
                child = f"{attr}.{child}"
            elif attr:
                child = attr
            errors.extend(_flatten(value, child))
    elif isinstance(details, list):
        for index, value in enumerate(details):
            if _is_leaf(value) or not value:
                errors.extend(_flatten(value, attr) if value else [])
            else:
                child = f"{attr}.{index}" if attr else str(index)
                errors.extend(_flatten(value, child))
    return errors
