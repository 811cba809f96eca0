"""Integration tests for standardized error responses."""

import pytest

pytestmark = pytest.mark.integration


class TestStandardizedErrors:
    def test_auth_error_has_standard_format(self, api_client):
        response = api_client.get("/pedidos")
        assert response.status_code == 401
        data = response.json()
        assert data["type"] == "client_error"
        assert isinstance(data["errors"], list)
        assert data["errors"]
        assert "code" in data["errors"][0]
        assert "detail" in data["errors"][0]
        assert "attr" in data["errors"][0]

    def test_malformed_json_has_standard_format(self, auth_client):
        response = auth_client.post("/pedidos", data="{", content_type="application/json")
        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "client_error"
        assert data["errors"][0]["code"] == "parse_error"

    def test_validation_error_has_standard_format(self, auth_client):
        response = auth_client.post("/pedidos", {}, format="json")
        assert response.status_code == 400
        data = response.json()
        assert data["type"] == "validation_error"
        attrs = {error["attr"] for error in data["errors"]}
        assert {"cliente_id", "data", "itens"} <= attrs

    def test_not_found_has_standard_format(self, auth_client):
        response = auth_client.delete("/trocas/999999")
        assert response.status_code == 404
        assert response.json() == {
            "type": "client_error",
            "errors": [
                {"code": "not_found", "detail": "Troca não encontrada", "attr": None}
            ],
        }

    def test_method_not_allowed(self, auth_client, make_order):
        order = make_order()
        response = auth_client.delete(f"/pedidos/{order.id}")
        assert response.status_code == 405
        assert response.json()["errors"][0]["code"] == "method_not_allowed"

    def test_storage_failure_is_generic(self, auth_client, monkeypatch, settings):
        from django.db import OperationalError

        from modules.orders.repositories.django_repository import OrderDjangoRepository

        def boom(self, filters=None):
            raise OperationalError("could not connect to server")

        settings.DEBUG = False
        monkeypatch.setattr(OrderDjangoRepository, "list", boom)

        response = auth_client.get("/pedidos")

        assert response.status_code == 500
        data = response.json()
        assert data["type"] == "server_error"
        assert "could not connect" not in data["errors"][0]["detail"]
