"""Integration tests for ``POST /pedidos``.

Covers:
- Success 201: totals, default status, response shape.
- Validation 400: missing fields, empty lines, bad quantity, status and date.
- Not found 404: customer, route, product (with the offending field).
- Conflict 409: duplicate ``chave_pedido``.
- Authentication 401.
"""

from __future__ import annotations

import pytest

from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration


@pytest.fixture()
def payload(customer, product_a):
    return {
        "cliente_id": customer.id,
        "data": "2024-03-01",
        "itens": [{"produto_id": product_a.id, "quantidade": 3, "valor_unitario": "10.00"}],
    }


class TestCreateOrderSuccess:
    def test_returns_201_with_total(self, auth_client, payload, customer, product_a):
        response = auth_client.post("/pedidos", payload, format="json")

        assert response.status_code == 201
        body = response.json()
        assert body["valor_total"] == "30.00"
        assert body["status"] == "EM_ESPERA"
        assert body["ordem_remaneio"] is None
        assert body["cliente_id"] == customer.id
        assert body["codigo_cliente"] == "C001"
        assert body["cliente_nome"] == "Mercado Bom Preço"
        assert body["tem_trocas"] is False
        assert body["qtd_trocas"] == 0
        assert body["nomes_trocas"] is None
        assert body["chave_pedido"].startswith("C001")

        [line] = body["itens"]
        assert line["produto_id"] == product_a.id
        assert line["codigo_produto"] == "P001"
        assert line["produto_nome"] == "Pão Francês"
        assert line["quantidade"] == "3.000"
        assert line["valor_total_item"] == "30.00"
        assert line["comissao"] == "0.00"

    def test_status_is_normalized(self, auth_client, payload):
        payload["status"] = " conferir "
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 201
        assert response.json()["status"] == "CONFERIR"
        assert response.json()["ordem_remaneio"] == 1

    def test_legacy_ok_alias(self, auth_client, payload):
        payload["status"] = "ok"
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.json()["status"] == "EFETIVADO"

    @pytest.mark.parametrize("raw", ["", None])
    def test_blank_status_defaults_to_waiting(self, auth_client, payload, raw):
        payload["status"] = raw
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 201
        assert response.json()["status"] == "EM_ESPERA"
        assert response.json()["ordem_remaneio"] is None

    def test_route_and_key(self, auth_client, payload, route):
        payload["rota_id"] = route.id
        payload["chave_pedido"] = "PED-0001"
        body = auth_client.post("/pedidos", payload, format="json").json()
        assert body["rota_id"] == route.id
        assert body["rota_nome"] == "Centro"
        assert body["chave_pedido"] == "PED-0001"

    def test_records_author(self, auth_client, payload, user):
        body = auth_client.post("/pedidos", payload, format="json").json()
        assert Order.objects.get(id=body["id"]).created_by_id == user.id


class TestCreateOrderValidation:
    @pytest.mark.parametrize("field", ["cliente_id", "data", "itens"])
    def test_missing_required_field(self, auth_client, payload, field):
        del payload[field]
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 400
        body = response.json()
        assert body["type"] == "validation_error"
        assert body["errors"][0]["attr"] == field

    def test_empty_lines(self, auth_client, payload):
        payload["itens"] = []
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "itens"

    def test_zero_quantity(self, auth_client, payload):
        payload["itens"][0]["quantidade"] = 0
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == "itens.0.quantidade"

    def test_invalid_status(self, auth_client, payload):
        payload["status"] = "PENDENTE"
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 400
        error = response.json()["errors"][0]
        assert error["attr"] == "status"
        assert "EM_ESPERA" in error["detail"]

    @pytest.mark.parametrize("raw", ["01/03/2024", "2024-03-01T10:00:00", "2024-02-30"])
    def test_invalid_date(self, auth_client, payload, raw):
        payload["data"] = raw
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["detail"] == "Use data no formato YYYY-MM-DD"

    def test_nothing_is_written_on_failure(self, auth_client, payload):
        payload["itens"][0]["quantidade"] = -1
        auth_client.post("/pedidos", payload, format="json")
        assert Order.objects.count() == 0
        assert OrderItem.objects.count() == 0


class TestCreateOrderReferences:
    def test_unknown_customer(self, auth_client, payload):
        payload["cliente_id"] = 999999
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 404
        assert response.json()["errors"][0] == {
            "code": "not_found",
            "detail": "Cliente não encontrado",
            "attr": "cliente_id",
        }

    def test_unknown_route(self, auth_client, payload):
        payload["rota_id"] = 999999
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 404
        assert response.json()["errors"][0]["attr"] == "rota_id"

    def test_unknown_product(self, auth_client, payload):
        payload["itens"].append(
            {"produto_id": 999999, "quantidade": 1, "valor_unitario": "1.00"}
        )
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 404
        error = response.json()["errors"][0]
        assert error["attr"] == "produto_id"
        assert "999999" in error["detail"]
        assert Order.objects.count() == 0

    def test_duplicate_key(self, auth_client, payload):
        payload["chave_pedido"] = "PED-0001"
        assert auth_client.post("/pedidos", payload, format="json").status_code == 201
        response = auth_client.post("/pedidos", payload, format="json")
        assert response.status_code == 409
        assert response.json()["errors"][0]["attr"] == "chave_pedido"


class TestCreateOrderAuth:
    def test_requires_authentication(self, api_client, payload):
        response = api_client.post("/pedidos", payload, format="json")
        assert response.status_code == 401
        assert response.json()["type"] == "client_error"
