"""Order domain constants.

``OrderStatus`` is the closed set of order states.  Any status may move to
any other one; the only rule tied to a transition is the remaneio position,
which exists exclusively while an order is ``AWAITING_REVIEW``.
"""

from decimal import Decimal

from django.db import models


class OrderStatus(models.TextChoices):
    WAITING = "EM_ESPERA", "Em espera"
    AWAITING_REVIEW = "CONFERIR", "Conferir"
    EFFECTIVATED = "EFETIVADO", "Efetivado"
    CANCELLED = "CANCELADO", "Cancelado"


LEGACY_STATUS_ALIASES: dict[str, str] = {"OK": OrderStatus.EFFECTIVATED.value}

INVALID_STATUS_MESSAGE = "Status inválido. Valores permitidos: " + ", ".join(
    OrderStatus.values
)

FIRST_REMANEIO_POSITION = 1

MONEY_QUANTUM = Decimal("0.01")
