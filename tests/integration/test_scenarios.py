"""End-to-end flows through the HTTP API."""

from __future__ import annotations

from decimal import Decimal

import pytest

from modules.orders.models import Order, OrderItem

pytestmark = pytest.mark.integration


def _create(client, customer, product, **extra):
    payload = {
        "cliente_id": customer.id,
        "data": "2024-03-01",
        "itens": [{"produto_id": product.id, "quantidade": 3, "valor_unitario": "10.00"}],
    }
    payload.update(extra)
    response = client.post("/pedidos", payload, format="json")
    assert response.status_code == 201, response.json()
    return response.json()


class TestOrderLifecycle:
    def test_create_order(self, auth_client, customer, product_a):
        body = _create(auth_client, customer, product_a)
        assert body["valor_total"] == "30.00"
        assert body["status"] == "EM_ESPERA"

    def test_conferir_positions_follow_transition_order(
        self, auth_client, customer, product_a
    ):
        orders = [_create(auth_client, customer, product_a) for _ in range(3)]

        positions = []
        for order in orders:
            response = auth_client.patch(
                f"/pedidos/{order['id']}/status", {"status": "CONFERIR"}, format="json"
            )
            positions.append(response.json()["ordem_remaneio"])

        assert positions == [1, 2, 3]

    def test_reorder_with_waiting_order_changes_nothing(
        self, auth_client, customer, product_a
    ):
        review = [
            _create(auth_client, customer, product_a, status="CONFERIR") for _ in range(2)
        ]
        waiting = _create(auth_client, customer, product_a)
        before = {o["id"]: Order.objects.get(id=o["id"]).remaneio_position for o in review}

        response = auth_client.patch(
            "/pedidos/remaneio/ordem",
            {"pedido_ids": [review[1]["id"], waiting["id"]]},
            format="json",
        )

        assert response.status_code == 400
        assert response.json()["invalidos"] == [waiting["id"]]
        after = {o["id"]: Order.objects.get(id=o["id"]).remaneio_position for o in review}
        assert after == before
        assert Order.objects.get(id=waiting["id"]).remaneio_position is None

    def test_replacing_lines_keeps_exchange_without_line(
        self, auth_client, customer, product_a, product_b
    ):
        order = _create(auth_client, customer, product_a)
        line_id = order["itens"][0]["id"]
        exchange = auth_client.post(
            "/trocas",
            {
                "pedido_id": order["id"],
                "item_pedido_id": line_id,
                "produto_id": product_a.id,
                "quantidade": 1,
            },
            format="json",
        ).json()

        response = auth_client.put(
            f"/pedidos/{order['id']}",
            {"itens": [{"produto_id": product_b.id, "quantidade": 1, "valor_unitario": "32.00"}]},
            format="json",
        )
        assert response.status_code == 200
        assert response.json()["tem_trocas"] is True

        fetched = auth_client.get(f"/trocas/{exchange['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["item_pedido_id"] is None
        assert not OrderItem.objects.filter(id=line_id).exists()

    def test_total_matches_lines_after_every_step(
        self, auth_client, customer, product_a, product_b
    ):
        order = _create(auth_client, customer, product_a)
        auth_client.put(
            f"/pedidos/{order['id']}",
            {
                "itens": [
                    {"produto_id": product_a.id, "quantidade": "1.333", "valor_unitario": "2.99"},
                    {"produto_id": product_b.id, "quantidade": "7", "valor_unitario": "0.15"},
                ]
            },
            format="json",
        )
        auth_client.patch(
            f"/pedidos/{order['id']}/status", {"status": "EFETIVADO"}, format="json"
        )

        stored = Order.objects.get(id=order["id"])
        lines = OrderItem.objects.filter(order_id=order["id"])
        assert stored.total_value == sum((line.line_total for line in lines), Decimal("0.00"))
        assert stored.total_value == Decimal("5.04")
