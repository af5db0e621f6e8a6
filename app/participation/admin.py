"""
Django admin configuration for participation models.

Debates, proposals and comments list hidden rows too (their default
manager includes them) and offer hide/restore actions.
"""

from django.contrib import admin

from participation.models import Comment, Debate, Flag, Proposal, Vote


class HideableAdmin(admin.ModelAdmin):
    """Shared moderation actions for hideable content."""

    actions = ["hide_selected", "restore_selected"]
    readonly_fields = ("hidden_at", "confirmed_hide_at", "created_at", "updated_at")

    @admin.display(boolean=True, description="Hidden")
    def hidden(self, obj):
        return obj.is_hidden

    @admin.action(description="Hide selected items")
    def hide_selected(self, request, queryset):
        count = self.model.objects.hide_all(queryset.values_list("pk", flat=True))
        self.message_user(request, f"{count} item(s) hidden.")

    @admin.action(description="Restore selected items")
    def restore_selected(self, request, queryset):
        count = self.model.objects.restore_all(queryset.values_list("pk", flat=True))
        self.message_user(request, f"{count} item(s) restored.")


@admin.register(Debate)
class DebateAdmin(HideableAdmin):
    list_display = ("title", "author", "hidden", "created_at")
    search_fields = ("title",)
    raw_id_fields = ("author",)


@admin.register(Proposal)
class ProposalAdmin(HideableAdmin):
    list_display = ("title", "author", "hidden", "created_at")
    search_fields = ("title", "summary")
    raw_id_fields = ("author",)


@admin.register(Comment)
class CommentAdmin(HideableAdmin):
    list_display = ("id", "user", "commentable_type", "commentable_id", "hidden", "created_at")
    raw_id_fields = ("user",)


@admin.register(Vote)
class VoteAdmin(admin.ModelAdmin):
    list_display = ("voter", "votable_type", "votable_id", "vote_flag", "created_at")
    list_filter = ("vote_flag", "votable_type")
    raw_id_fields = ("voter",)


@admin.register(Flag)
class FlagAdmin(admin.ModelAdmin):
    list_display = ("user", "flaggable_type", "flaggable_id", "created_at")
    list_filter = ("flaggable_type",)
    raw_id_fields = ("user",)
