"""Exchange URL configuration."""

from __future__ import annotations

from rest_framework.routers import SimpleRouter

from modules.exchanges.views import ExchangeViewSet

router = SimpleRouter(trailing_slash=False)
router.register("trocas", ExchangeViewSet, basename="troca")

urlpatterns = router.urls
