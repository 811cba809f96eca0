"""Helpers for building Pydantic DTOs at the API boundary."""

from __future__ import annotations

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from modules.core.exceptions import DomainValidationError

DTO = TypeVar("DTO", bound=BaseModel)


def build_dto(dto_class: Type[DTO], data: Dict[str, Any]) -> DTO:
    """Instantiate ``dto_class`` from serializer output.

    A Pydantic failure becomes a ``DomainValidationError`` naming the first
    offending field, so it is reported like any other 400.
    """
    try:
        return dto_class(**data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        message = first.get("ctx", {}).get("error") or first["msg"]
        attr = ".".join(str(part) for part in first["loc"]) or None
        raise DomainValidationError(str(message), attr=attr) from exc
