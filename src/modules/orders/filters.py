import django_filters
from django.db.models import Q
from rest_framework.exceptions import ValidationError

from modules.core.normalization import normalize_date, normalize_status
from modules.orders.constants import INVALID_STATUS_MESSAGE
from modules.orders.dtos import INVALID_DATE_MESSAGE
from modules.orders.models import Order


class OrderFilter(django_filters.FilterSet):
    """Query-string filters shared by the plain and paginated listings."""

    data = django_filters.CharFilter(method="filter_order_date")
    rota_id = django_filters.NumberFilter(field_name="route_id")
    cliente_id = django_filters.NumberFilter(field_name="customer_id")
    status = django_filters.CharFilter(method="filter_status")
    q = django_filters.CharFilter(method="filter_search")

    class Meta:
        model = Order
        fields = ["data", "rota_id", "cliente_id", "status", "q"]

    def filter_order_date(self, queryset, name, value):
        order_date = normalize_date(value)
        if order_date is None:
            raise ValidationError({"data": [INVALID_DATE_MESSAGE]})
        return queryset.filter(order_date=order_date)

    def filter_status(self, queryset, name, value):
        status = normalize_status(value)
        if status is None:
            raise ValidationError({"status": [INVALID_STATUS_MESSAGE]})
        return queryset.filter(status=status)

    def filter_search(self, queryset, name, value):
        term = value.strip()
        if not term:
            return queryset
        return queryset.filter(
            Q(customer__name__icontains=term)
            | Q(customer__code__icontains=term)
            | Q(order_key__icontains=term)
        )
