"""Exchange API views."""

from __future__ import annotations

from rest_framework import status
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.viewsets import GenericViewSet

from modules.core.dtos import build_dto
from modules.exchanges.dtos import CreateExchangeDTO
from modules.exchanges.models import Exchange
from modules.exchanges.repositories import ExchangeDjangoRepository
from modules.exchanges.serializers import CreateExchangeSerializer, ExchangeSerializer
from modules.exchanges.services import ExchangeService
from modules.orders.repositories import OrderDjangoRepository
from modules.products.repositories import ProductDjangoRepository


class ExchangeViewSet(GenericViewSet):
    """ViewSet for ``/trocas``: create, retrieve and delete only."""

    queryset = Exchange.objects.all()
    serializer_class = ExchangeSerializer
    lookup_value_regex = r"\d+"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        exchange_repository = ExchangeDjangoRepository()
        self._service = ExchangeService(
            exchange_repository=exchange_repository,
            order_repository=OrderDjangoRepository(
                exchange_repository=exchange_repository
            ),
            product_repository=ProductDjangoRepository(),
        )

    def create(self, request: Request) -> Response:
        """POST /trocas"""
        serializer = CreateExchangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        dto = build_dto(CreateExchangeDTO, serializer.validated_data)
        exchange = self._service.create_exchange(dto, user_id=request.user.id)
        return Response(
            ExchangeSerializer(exchange).data, status=status.HTTP_201_CREATED
        )

    def retrieve(self, request: Request, pk: str | None = None) -> Response:
        """GET /trocas/{pk}"""
        exchange = self._service.get_exchange(int(pk))
        return Response(ExchangeSerializer(exchange).data)

    def destroy(self, request: Request, pk: str | None = None) -> Response:
        """DELETE /trocas/{pk}"""
        self._service.delete_exchange(int(pk))
        return Response(status=status.HTTP_204_NO_CONTENT)
