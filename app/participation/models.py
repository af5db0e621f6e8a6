"""
Participation models.

Content authored by accounts and the reactions to it:
- Debate: Open discussion started by an account
- Proposal: Citizen proposal
- Comment: Comment on any commentable object (debate, proposal, ...)
- Vote: An account's vote on any votable object
- Flag: An account reporting any flaggable object as inappropriate

Debates, proposals and comments are hideable (see core.model_mixins).
Their default manager (all_objects) includes hidden rows so an author's
reverse relations (user.debates, user.comments) always see everything;
Model.objects excludes hidden rows.

Usage:
    from participation.models import Debate, Vote

    Debate.objects.all()                  # visible debates
    user.debates.all()                    # includes hidden
    Vote.objects.for_votables(debates)    # votes on those debates
"""

from __future__ import annotations

from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models

from core.managers import SoftDeleteManager, WithHiddenManager
from core.model_mixins import SoftDeleteMixin
from core.models import BaseModel


def _target_ids(targets, model=None):
    """
    Resolve (content type, ids) for a queryset, instances or raw ids.

    Raises:
        ValueError: When the model cannot be inferred
    """
    if isinstance(targets, models.QuerySet):
        model = model or targets.model
        ids = list(targets.values_list("pk", flat=True))
    else:
        targets = list(targets)
        ids = [getattr(target, "pk", target) for target in targets]
        if model is None:
            if not targets or not isinstance(targets[0], models.Model):
                raise ValueError("model is required when passing ids")
            model = type(targets[0])
    return ContentType.objects.get_for_model(model), ids


class Debate(SoftDeleteMixin, BaseModel):
    """Open discussion started by an account."""

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="debates",
    )
    title = models.CharField(max_length=80)
    description = models.TextField(blank=True)

    all_objects = WithHiddenManager()
    objects = SoftDeleteManager()

    class Meta(BaseModel.Meta):
        db_table = "participation_debate"
        default_manager_name = "all_objects"

    def __str__(self):
        return self.title


class Proposal(SoftDeleteMixin, BaseModel):
    """Citizen proposal."""

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="proposals",
    )
    title = models.CharField(max_length=80)
    summary = models.TextField(max_length=200, blank=True)
    description = models.TextField(blank=True)

    all_objects = WithHiddenManager()
    objects = SoftDeleteManager()

    class Meta(BaseModel.Meta):
        db_table = "participation_proposal"
        default_manager_name = "all_objects"

    def __str__(self):
        return self.title


class Comment(SoftDeleteMixin, BaseModel):
    """Comment on a debate, proposal or any other commentable object."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="comments",
    )
    commentable_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    commentable_id = models.PositiveBigIntegerField()
    commentable = GenericForeignKey("commentable_type", "commentable_id")
    body = models.TextField()

    all_objects = WithHiddenManager()
    objects = SoftDeleteManager()

    class Meta(BaseModel.Meta):
        db_table = "participation_comment"
        default_manager_name = "all_objects"
        indexes = [
            models.Index(
                fields=["commentable_type", "commentable_id"],
                name="participation_commentable_idx",
            ),
        ]

    def __str__(self):
        return f"Comment {self.pk} by {self.user_id}"


class VoteQuerySet(models.QuerySet):
    def for_votables(self, votables, model=None):
        """Votes cast on the given votables (queryset, instances or ids+model)."""
        content_type, ids = _target_ids(votables, model)
        return self.filter(votable_type=content_type, votable_id__in=ids)


class Vote(BaseModel):
    """
    An account's vote on a votable object.

    Fields:
        voter: Account that voted
        votable: Voted object (generic)
        vote_flag: True for a positive vote, False for a negative one
        vote_weight: Weight of the vote
    """

    voter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="votes",
    )
    votable_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    votable_id = models.PositiveBigIntegerField()
    votable = GenericForeignKey("votable_type", "votable_id")
    vote_flag = models.BooleanField(default=True)
    vote_weight = models.PositiveIntegerField(default=1)

    objects = VoteQuerySet.as_manager()

    class Meta(BaseModel.Meta):
        db_table = "participation_vote"
        constraints = [
            models.UniqueConstraint(
                fields=["voter", "votable_type", "votable_id"],
                name="unique_vote_per_voter",
            ),
        ]

    def __str__(self):
        return f"Vote {'+' if self.vote_flag else '-'} by {self.voter_id}"


class FlagQuerySet(models.QuerySet):
    def for_flaggables(self, flaggables, model=None):
        """Flags raised on the given flaggables (queryset, instances or ids+model)."""
        content_type, ids = _target_ids(flaggables, model)
        return self.filter(flaggable_type=content_type, flaggable_id__in=ids)


class Flag(BaseModel):
    """An account reporting a flaggable object as inappropriate."""

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="flags",
    )
    flaggable_type = models.ForeignKey(ContentType, on_delete=models.CASCADE)
    flaggable_id = models.PositiveBigIntegerField()
    flaggable = GenericForeignKey("flaggable_type", "flaggable_id")

    objects = FlagQuerySet.as_manager()

    class Meta(BaseModel.Meta):
        db_table = "participation_flag"
        constraints = [
            models.UniqueConstraint(
                fields=["user", "flaggable_type", "flaggable_id"],
                name="unique_flag_per_user",
            ),
        ]

    def __str__(self):
        return f"Flag by {self.user_id}"

    @classmethod
    def _lookup(cls, user, flaggable):
        return {
            "user": user,
            "flaggable_type": ContentType.objects.get_for_model(flaggable),
            "flaggable_id": flaggable.pk,
        }

    @classmethod
    def flag(cls, user, flaggable):
        """Flag flaggable; returns False when it was already flagged."""
        _, created = cls.objects.get_or_create(**cls._lookup(user, flaggable))
        return created

    @classmethod
    def unflag(cls, user, flaggable):
        """Remove the flag; returns False when there was none."""
        deleted, _ = cls.objects.filter(**cls._lookup(user, flaggable)).delete()
        return deleted > 0

    @classmethod
    def is_flagged(cls, user, flaggable):
        return cls.objects.filter(**cls._lookup(user, flaggable)).exists()
