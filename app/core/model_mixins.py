"""
Model mixins providing reusable functionality for Django models.

This module contains abstract mixin classes that can be combined with
BaseModel to add specific functionality. They are generic infrastructure
classes with no domain-specific logic.

Available Mixins:
    SoftDeleteMixin: Hide records behind a tombstone timestamp (hidden_at)

Usage:
    from core.models import BaseModel
    from core.model_mixins import SoftDeleteMixin
    from core.managers import SoftDeleteManager, WithHiddenManager

    class Debate(SoftDeleteMixin, BaseModel):
        all_objects = WithHiddenManager()
        objects = SoftDeleteManager()

        title = models.CharField(max_length=200)

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are abstract and don't create database tables
    - SoftDeleteMixin requires SoftDeleteManager (see core.managers)
"""

from __future__ import annotations

from django.db import models
from django.utils import timezone


class SoftDeleteMixin(models.Model):
    """
    Soft delete ("hide") support for models.

    Instead of permanently deleting records, stamps them with hidden_at.
    Hidden records are excluded from default queries but kept in the
    database so references to them stay valid. A moderator can later
    confirm the hide (confirmed_hide_at) or restore the record.

    Fields:
        hidden_at: Timestamp when the record was hidden (null = visible)
        confirmed_hide_at: Timestamp when a moderator confirmed the hide

    Usage:
        # Normal queries exclude hidden records
        Debate.objects.all()

        # Hide / restore
        debate.hide()
        debate.restore()

        # Access hidden records
        Debate.objects.only_hidden()
        Debate.objects.with_hidden()

    Hooks:
        after_hide(): Called after a successful hide()
        after_restore(): Called after a successful restore()
    """

    hidden_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        help_text="Timestamp when this record was hidden",
    )
    confirmed_hide_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="Timestamp when a moderator confirmed the hide",
    )

    class Meta:
        abstract = True

    @property
    def is_hidden(self) -> bool:
        """Whether this record has been hidden."""
        return self.hidden_at is not None

    @property
    def is_confirmed_hide(self) -> bool:
        """Whether a moderator confirmed hiding this record."""
        return self.confirmed_hide_at is not None

    def hide(self) -> bool:
        """
        Mark this record as hidden.

        Returns:
            False if the record was already hidden, True otherwise

        Example:
            debate.hide()
            assert debate.is_hidden
        """
        if self.is_hidden:
            return False
        self.hidden_at = timezone.now()
        self.save(update_fields=["hidden_at"])
        self.after_hide()
        return True

    def restore(self) -> bool:
        """
        Restore a hidden record and clear any hide confirmation.

        Returns:
            False if the record was not hidden, True otherwise
        """
        if not self.is_hidden:
            return False
        self.hidden_at = None
        self.confirmed_hide_at = None
        self.save(update_fields=["hidden_at", "confirmed_hide_at"])
        self.after_restore()
        return True

    def confirm_hide(self) -> None:
        """Stamp the moderator confirmation of a hide."""
        self.confirmed_hide_at = timezone.now()
        self.save(update_fields=["confirmed_hide_at"])

    def after_hide(self) -> None:
        """Hook for subclasses; runs after hide()."""

    def after_restore(self) -> None:
        """Hook for subclasses; runs after restore()."""
