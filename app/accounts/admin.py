"""
Django admin configuration for account models.

This module registers User, the role records, Organization, Lock,
Identity and FailedCensusCall with the Django admin site.

Related files:
    - models.py: Model definitions
"""

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.contrib.auth.forms import UserChangeForm, UserCreationForm

from accounts.models import (
    Administrator,
    FailedCensusCall,
    Identity,
    Lock,
    Moderator,
    Organization,
    User,
)


class AccountCreationForm(UserCreationForm):
    """Admin-created accounts skip the signup-only checks."""

    class Meta(UserCreationForm.Meta):
        model = User
        fields = ("email", "username")

    def _post_clean(self):
        # Password strength is checked by the form's own password fields
        self.instance.terms_of_service = True
        self.instance.skip_password_validation = True
        super()._post_clean()


class AccountChangeForm(UserChangeForm):
    class Meta(UserChangeForm.Meta):
        model = User
        fields = "__all__"


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """
    Admin configuration for User model.

    Lists blocked accounts too and offers block, restore and erase actions.
    """

    form = AccountChangeForm
    add_form = AccountCreationForm

    list_display = (
        "email",
        "username",
        "official_level",
        "is_hidden",
        "is_erased",
        "date_joined",
    )
    list_filter = (
        "is_staff",
        "is_superuser",
        "official_level",
        "newsletter",
        "date_joined",
    )
    search_fields = ("email", "username", "document_number")
    ordering = ("-date_joined",)
    actions = ["block_selected", "restore_selected", "erase_selected"]

    fieldsets = (
        (None, {"fields": ("email", "username", "password")}),
        (
            "Identity",
            {"fields": ("document_type", "document_number", "phone_number", "confirmed_phone")},
        ),
        (
            "Official",
            {"fields": ("official_position", "official_level")},
        ),
        (
            "Verification",
            {"fields": ("confirmed_at", "residence_verified_at", "level_two_verified_at", "verified_at")},
        ),
        (
            "Preferences",
            {
                "fields": (
                    "locale",
                    "public_activity",
                    "newsletter",
                    "email_on_comment",
                    "email_on_comment_reply",
                )
            },
        ),
        (
            "Status",
            {"fields": ("is_active", "is_staff", "is_superuser", "hidden_at", "erased_at", "erase_reason")},
        ),
        (
            "Permissions",
            {"fields": ("groups", "user_permissions")},
        ),
        (
            "Sign-in tracking",
            {
                "fields": (
                    "sign_in_count",
                    "current_sign_in_at",
                    "last_sign_in_at",
                    "current_sign_in_ip",
                    "last_sign_in_ip",
                    "last_login",
                    "date_joined",
                )
            },
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("email", "username", "password1", "password2"),
            },
        ),
    )

    readonly_fields = (
        "hidden_at",
        "erased_at",
        "erase_reason",
        "sign_in_count",
        "current_sign_in_at",
        "last_sign_in_at",
        "current_sign_in_ip",
        "last_sign_in_ip",
        "last_login",
        "date_joined",
    )

    def get_queryset(self, request):
        return User.all_objects.all()

    @admin.display(boolean=True, description="Blocked")
    def is_hidden(self, obj):
        return obj.is_hidden

    @admin.display(boolean=True, description="Erased")
    def is_erased(self, obj):
        return obj.is_erased

    @admin.action(description="Block selected accounts and hide their content")
    def block_selected(self, request, queryset):
        count = 0
        for user in queryset:
            if not user.is_hidden:
                user.block()
                count += 1
        self.message_user(request, f"{count} account(s) blocked.")

    @admin.action(description="Restore selected accounts")
    def restore_selected(self, request, queryset):
        count = User.objects.restore_all(queryset.values_list("pk", flat=True))
        self.message_user(request, f"{count} account(s) restored.")

    @admin.action(description="Erase selected accounts")
    def erase_selected(self, request, queryset):
        count = sum(1 for user in queryset if user.erase("Erased from admin"))
        self.message_user(request, f"{count} account(s) erased.")


@admin.register(Administrator, Moderator)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("user", "created_at")
    search_fields = ("user__email", "user__username")
    raw_id_fields = ("user",)


@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    """
    Admin configuration for Organization model.

    Verification and rejection are timestamps; the latest one wins.
    """

    list_display = ("name", "responsible_name", "user", "is_verified", "is_rejected")
    search_fields = ("name", "responsible_name", "user__email")
    raw_id_fields = ("user",)
    readonly_fields = ("verified_at", "rejected_at", "created_at", "updated_at")
    actions = ["verify_selected", "reject_selected"]

    @admin.display(boolean=True, description="Verified")
    def is_verified(self, obj):
        return obj.is_verified

    @admin.display(boolean=True, description="Rejected")
    def is_rejected(self, obj):
        return obj.is_rejected

    @admin.action(description="Verify selected organizations")
    def verify_selected(self, request, queryset):
        for organization in queryset:
            organization.verify()
        self.message_user(request, f"{len(queryset)} organization(s) verified.")

    @admin.action(description="Reject selected organizations")
    def reject_selected(self, request, queryset):
        for organization in queryset:
            organization.reject()
        self.message_user(request, f"{len(queryset)} organization(s) rejected.")


@admin.register(Lock)
class LockAdmin(admin.ModelAdmin):
    list_display = ("user", "tries", "locked_until")
    raw_id_fields = ("user",)


@admin.register(Identity)
class IdentityAdmin(admin.ModelAdmin):
    list_display = ("provider", "uid", "user", "created_at")
    list_filter = ("provider",)
    search_fields = ("uid", "user__email")
    raw_id_fields = ("user",)


@admin.register(FailedCensusCall)
class FailedCensusCallAdmin(admin.ModelAdmin):
    list_display = ("document_type", "document_number", "postal_code", "user", "created_at")
    search_fields = ("document_number", "user__email")
    raw_id_fields = ("user",)
