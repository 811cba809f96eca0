"""Unit tests for the DRF exception handler and the error taxonomy."""

from __future__ import annotations

import pytest
from django.db import OperationalError
from pydantic import BaseModel, Field
from rest_framework import exceptions as drf_exceptions

from modules.core.dtos import build_dto
from modules.core.exceptions import (
    ConflictError,
    DomainValidationError,
    NotFoundError,
    StorageError,
    _flatten,
    api_exception_handler,
)
from modules.orders.exceptions import InvalidRemaneioSequence

pytestmark = pytest.mark.unit


class TestDomainErrors:
    def test_not_found_is_404(self):
        response = api_exception_handler(NotFoundError("Pedido não encontrado"), {})
        assert response.status_code == 404
        assert response.data == {
            "type": "client_error",
            "errors": [
                {"code": "not_found", "detail": "Pedido não encontrado", "attr": None}
            ],
        }

    def test_conflict_is_409(self):
        response = api_exception_handler(
            ConflictError("Chave do pedido já existe", attr="chave_pedido"), {}
        )
        assert response.status_code == 409
        assert response.data["errors"][0]["attr"] == "chave_pedido"

    def test_validation_is_400(self):
        response = api_exception_handler(DomainValidationError("bad", attr="data"), {})
        assert response.status_code == 400
        assert response.data["type"] == "validation_error"

    def test_invalid_sequence_carries_offending_ids(self):
        response = api_exception_handler(InvalidRemaneioSequence([7, 9]), {})
        assert response.status_code == 400
        assert response.data["invalidos"] == [7, 9]
        assert response.data["errors"][0]["attr"] == "pedido_ids"
        assert response.data["errors"][0]["code"] == "invalid_sequence"


class TestStorageErrors:
    def test_database_error_is_generic_500(self, settings):
        settings.DEBUG = False
        response = api_exception_handler(OperationalError("connection refused"), {})
        assert response.status_code == 500
        assert response.data["type"] == "server_error"
        detail = response.data["errors"][0]["detail"]
        assert "connection refused" not in detail

    def test_debug_mode_includes_driver_detail(self, settings):
        settings.DEBUG = True
        response = api_exception_handler(OperationalError("connection refused"), {})
        assert "connection refused" in response.data["errors"][0]["detail"]

    def test_storage_error_class(self):
        assert StorageError.status_code == 500


class TestDrfErrors:
    def test_field_validation_error(self):
        exc = drf_exceptions.ValidationError({"status": ["status é obrigatório"]})
        response = api_exception_handler(exc, {})
        assert response.status_code == 400
        assert response.data == {
            "type": "validation_error",
            "errors": [
                {"code": "invalid", "detail": "status é obrigatório", "attr": "status"}
            ],
        }

    def test_not_authenticated(self):
        response = api_exception_handler(drf_exceptions.NotAuthenticated(), {})
        assert response.status_code == 401
        assert response.data["type"] == "client_error"
        assert response.data["errors"][0]["code"] == "not_authenticated"

    def test_unknown_exception_is_not_handled(self):
        assert api_exception_handler(RuntimeError("boom"), {}) is None


class TestFlatten:
    def test_nested_list_paths(self):
        details = {
            "itens": [
                {},
                {"quantidade": [{"message": "must be > 0", "code": "invalid"}]},
            ]
        }
        assert _flatten(details) == [
            {"code": "invalid", "detail": "must be > 0", "attr": "itens.1.quantidade"}
        ]

    def test_non_field_errors_have_no_attr(self):
        details = {"non_field_errors": [{"message": "bad", "code": "invalid"}]}
        assert _flatten(details) == [{"code": "invalid", "detail": "bad", "attr": None}]

    def test_nested_non_field_errors_keep_parent_attr(self):
        details = {"itens": {"non_field_errors": [{"message": "empty", "code": "empty"}]}}
        assert _flatten(details)[0]["attr"] == "itens"


class _SampleDTO(BaseModel):
    quantity: int = Field(gt=0)


class TestBuildDto:
    def test_success(self):
        assert build_dto(_SampleDTO, {"quantity": 3}).quantity == 3

    def test_failure_becomes_domain_validation_error(self):
        with pytest.raises(DomainValidationError) as excinfo:
            build_dto(_SampleDTO, {"quantity": 0})
        assert excinfo.value.attr == "quantity"
