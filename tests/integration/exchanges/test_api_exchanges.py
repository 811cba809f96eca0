"""Integration tests for ``/trocas`` and ``GET /pedidos/{id}/trocas``."""

from __future__ import annotations

import pytest

from modules.exchanges.models import Exchange

pytestmark = pytest.mark.integration


@pytest.fixture()
def order(make_order):
    return make_order()


@pytest.fixture()
def payload(order, product_a):
    return {
        "pedido_id": order.id,
        "item_pedido_id": order.items.first().id,
        "produto_id": product_a.id,
        "quantidade": "2",
        "valor_troca": "5.00",
        "motivo": "Produto vencido",
    }


class TestCreateExchange:
    def test_returns_201(self, auth_client, payload, order, product_a):
        response = auth_client.post("/trocas", payload, format="json")
        assert response.status_code == 201
        body = response.json()
        assert body["pedido_id"] == order.id
        assert body["item_pedido_id"] == payload["item_pedido_id"]
        assert body["codigo_produto"] == "P001"
        assert body["produto_nome"] == "Pão Francês"
        assert body["produto"] == {"id": product_a.id, "codigo_produto": "P001", "nome": "Pão Francês"}
        assert body["quantidade"] == "2.000"
        assert body["valor_troca"] == "5.00"
        assert body["motivo"] == "Produto vencido"

    def test_optional_fields(self, auth_client, order, product_a):
        response = auth_client.post(
            "/trocas",
            {"pedido_id": order.id, "produto_id": product_a.id, "quantidade": 1},
            format="json",
        )
        assert response.status_code == 201
        body = response.json()
        assert body["item_pedido_id"] is None
        assert body["valor_troca"] == "0.00"
        assert body["motivo"] is None

    @pytest.mark.parametrize("field", ["pedido_id", "produto_id", "quantidade"])
    def test_missing_field(self, auth_client, payload, field):
        del payload[field]
        response = auth_client.post("/trocas", payload, format="json")
        assert response.status_code == 400
        assert response.json()["errors"][0]["attr"] == field

    def test_non_positive_quantity(self, auth_client, payload):
        payload["quantidade"] = "0"
        response = auth_client.post("/trocas", payload, format="json")
        assert response.status_code == 400

    def test_unknown_order(self, auth_client, payload):
        payload["pedido_id"] = 999999
        del payload["item_pedido_id"]
        response = auth_client.post("/trocas", payload, format="json")
        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == "Pedido não encontrado"

    def test_unknown_product(self, auth_client, payload):
        payload["produto_id"] = 999999
        response = auth_client.post("/trocas", payload, format="json")
        assert response.status_code == 404
        assert Exchange.objects.count() == 0


class TestReadAndDelete:
    def test_get(self, auth_client, payload):
        created = auth_client.post("/trocas", payload, format="json").json()
        response = auth_client.get(f"/trocas/{created['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_delete(self, auth_client, payload):
        created = auth_client.post("/trocas", payload, format="json").json()
        response = auth_client.delete(f"/trocas/{created['id']}")
        assert response.status_code == 204
        assert auth_client.get(f"/trocas/{created['id']}").status_code == 404

    def test_delete_missing(self, auth_client):
        response = auth_client.delete("/trocas/999999")
        assert response.status_code == 404
        assert response.json()["errors"][0]["detail"] == "Troca não encontrada"

    def test_list_for_order(self, auth_client, payload, order):
        first = auth_client.post("/trocas", payload, format="json").json()
        second = auth_client.post("/trocas", payload, format="json").json()
        rows = auth_client.get(f"/pedidos/{order.id}/trocas").json()
        assert [row["id"] for row in rows] == [second["id"], first["id"]]

    def test_list_for_unknown_order_is_empty(self, auth_client):
        response = auth_client.get("/pedidos/999999/trocas")
        assert response.status_code == 200
        assert response.json() == []
