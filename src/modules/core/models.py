"""Abstract audit models shared by the order and exchange tables.

Provides:
- ``CreationAuditModel``: ``criado_em`` / ``criado_por`` columns.
- ``AuditedModel``: adds ``atualizado_em`` / ``atualizado_por``.

The ``*_por`` columns reference the authenticated principal that performed
the mutation.  They are nullable: rows written by management commands or
by the seed script carry no principal.  Primary keys are plain integers
(``DEFAULT_AUTO_FIELD``) because the remaneio API addresses orders by id.
"""

from __future__ import annotations

from django.conf import settings
from django.db import models


class CreationAuditModel(models.Model):
    """Abstract base with creation timestamp and author."""

    created_at = models.DateTimeField(auto_now_add=True, db_column="criado_em")
    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        db_column="criado_por",
    )

    class Meta:
        abstract = True


class AuditedModel(CreationAuditModel):
    """Abstract base that also tracks the last update."""

    updated_at = models.DateTimeField(auto_now=True, db_column="atualizado_em")
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="+",
        db_column="atualizado_por",
    )

    class Meta:
        abstract = True

    def save(self, *args, **kwargs) -> None:
        """Ensure ``updated_at`` is refreshed even when ``update_fields`` is passed."""
        update_fields = kwargs.get("update_fields")
        if update_fields is not None and "updated_at" not in update_fields:
            kwargs["update_fields"] = list(update_fields) + ["updated_at"]
        super().save(*args, **kwargs)
