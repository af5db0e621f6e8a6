"""
Core base model and runtime configuration store.

This module contains the abstract base class that should be inherited by all
domain models in the application, plus the Setting key/value table that
administrators edit at runtime.

Base Classes:
    BaseModel: Abstract model with timestamps (created_at, updated_at)

Models:
    Setting: Runtime key/value configuration (e.g. official email domain)

For mixins (SoftDeleteMixin), see core.model_mixins.

Usage:
    from core.models import BaseModel, Setting
    from core.model_mixins import SoftDeleteMixin

    class Debate(SoftDeleteMixin, BaseModel):
        title = models.CharField(max_length=200)

    domain = Setting.get("email_domain_for_officials")

Note:
    - Always list mixins before BaseModel in inheritance
    - Mixins are in core.model_mixins
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """
    Abstract base model providing common fields for all models.

    All domain models should inherit from this class to ensure consistent
    tracking of creation and modification timestamps.

    Fields:
        created_at: Automatically set when the object is first created
        updated_at: Automatically updated whenever the object is saved

    Note:
        This is an abstract model (Meta.abstract = True) so it doesn't
        create a database table. Fields are added to inheriting models.
    """

    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True,  # Index for efficient time-based queries
        help_text="Timestamp when this record was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="Timestamp when this record was last modified",
    )

    class Meta:
        abstract = True
        # Default ordering by creation time (newest first)
        ordering = ["-created_at"]

    def __str__(self) -> str:
        """Default string representation using primary key."""
        return f"{self.__class__.__name__}(id={self.pk})"


class Setting(BaseModel):
    """
    Runtime configuration value editable from the admin.

    Values are stored as text; callers interpret them. A missing key or an
    empty value falls back to the default passed to get().

    Fields:
        key: Unique setting name (e.g. "email_domain_for_officials")
        value: Text value (may be empty)

    Usage:
        Setting.set("email_domain_for_officials", "madrid.es")
        Setting.get("email_domain_for_officials")  # "madrid.es"
        Setting.get("missing", default="x")         # "x"
    """

    key = models.CharField(
        max_length=255,
        unique=True,
        help_text="Setting name",
    )
    value = models.TextField(
        blank=True,
        default="",
        help_text="Setting value",
    )

    class Meta:
        db_table = "core_setting"
        ordering = ["key"]

    def __str__(self) -> str:
        return f"{self.key}={self.value}"

    @classmethod
    def get(cls, key: str, default: str | None = None) -> str | None:
        """Return the stored value for key, or default when unset/empty."""
        value = cls.objects.filter(key=key).values_list("value", flat=True).first()
        return value if value else default

    @classmethod
    def set(cls, key: str, value: str) -> Setting:
        """Create or update the setting and return it."""
        setting, _ = cls.objects.update_or_create(
            key=key, defaults={"value": value or ""}
        )
        return setting
