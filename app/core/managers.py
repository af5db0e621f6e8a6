"""
Custom QuerySet and Manager classes for common patterns.

This module provides reusable manager patterns:
- SoftDeleteQuerySet: Hide/restore operations and hidden-state filters
- SoftDeleteManager: Excludes hidden records by default
- WithHiddenManager: Includes hidden records, safe as a default manager

Manager vs QuerySet:
    - QuerySet: Defines chainable methods (filter, exclude, etc.)
    - Manager: Attaches QuerySet to model, defines table-level operations

Usage:
    from core.managers import SoftDeleteManager, WithHiddenManager

    class Debate(SoftDeleteMixin, BaseModel):
        all_objects = WithHiddenManager()
        objects = SoftDeleteManager()  # excludes hidden

        class Meta:
            default_manager_name = "all_objects"

    # Queries automatically exclude hidden
    Debate.objects.all()

    # Include hidden when needed
    Debate.objects.with_hidden()
    Debate.objects.only_hidden()

    # Bulk moderation
    Debate.objects.hide_all([1, 2, 3])
    Debate.objects.restore_all([1, 2, 3])

Related:
    - core.model_mixins.SoftDeleteMixin: Model mixin for the tombstone fields
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.db import models

if TYPE_CHECKING:
    from collections.abc import Iterable


class SoftDeleteQuerySet(models.QuerySet):
    """
    QuerySet that provides soft delete operations.

    Methods:
        hide_all(ids): Hide every visible record whose id is in ids
        restore_all(ids): Restore every hidden record whose id is in ids
        only_hidden(): Filter to hidden records
        visible(): Filter to visible records

    Note:
        hide_all/restore_all go through each instance's hide()/restore()
        so per-instance hooks (after_hide, after_restore) run.
    """

    def hide_all(self, ids: Iterable) -> int:
        """
        Hide the records with the given primary keys.

        Args:
            ids: Primary keys to hide (empty is a no-op)

        Returns:
            Number of records that were hidden by this call
        """
        ids = list(ids or [])
        if not ids:
            return 0
        model = self.model
        instances = model._base_manager.filter(pk__in=ids, hidden_at__isnull=True)
        return sum(1 for instance in instances if instance.hide())

    def restore_all(self, ids: Iterable) -> int:
        """
        Restore the hidden records with the given primary keys.

        Returns:
            Number of records restored by this call
        """
        ids = list(ids or [])
        if not ids:
            return 0
        model = self.model
        instances = model._base_manager.filter(pk__in=ids, hidden_at__isnull=False)
        return sum(1 for instance in instances if instance.restore())

    def only_hidden(self) -> SoftDeleteQuerySet:
        """Filter to hidden records."""
        return self.filter(hidden_at__isnull=False)

    def visible(self) -> SoftDeleteQuerySet:
        """Filter to records that are not hidden."""
        return self.filter(hidden_at__isnull=True)


class SoftDeleteManager(models.Manager.from_queryset(SoftDeleteQuerySet)):
    """
    Manager that filters out hidden records by default.

    Args:
        include_hidden: When True, the manager returns every record.
            Use it for a secondary manager (all_objects). A default
            manager that reverse relations go through should be a
            WithHiddenManager instead.

    Usage:
        class Comment(SoftDeleteMixin, BaseModel):
            objects = SoftDeleteManager()
            all_objects = SoftDeleteManager(include_hidden=True)
    """

    include_hidden = False

    def __init__(self, *args, include_hidden: bool | None = None, **kwargs):
        super().__init__(*args, **kwargs)
        if include_hidden is not None:
            self.include_hidden = include_hidden

    def get_queryset(self) -> SoftDeleteQuerySet:
        queryset = super().get_queryset()
        if self.include_hidden:
            return queryset
        return queryset.filter(hidden_at__isnull=True)

    def with_hidden(self) -> SoftDeleteQuerySet:
        """Queryset including hidden records."""
        return SoftDeleteQuerySet(self.model, using=self._db)

    def only_hidden(self) -> SoftDeleteQuerySet:
        """Queryset of hidden records only."""
        return self.with_hidden().only_hidden()


class WithHiddenManager(SoftDeleteManager):
    """
    SoftDeleteManager that returns hidden records too.

    Reverse relation managers (user.debates) are built from the default
    manager's class and instantiated without arguments, so a hideable
    model whose reverse relations must see hidden rows needs this class
    as its default manager.
    """

    include_hidden = True
