import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import accounts.managers
import accounts.models


def primary_key():
    return (
        "id",
        models.BigAutoField(
            auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
        ),
    )


def timestamps():
    return [
        (
            "created_at",
            models.DateTimeField(
                auto_now_add=True,
                db_index=True,
                help_text="Timestamp when this record was created",
            ),
        ),
        (
            "updated_at",
            models.DateTimeField(
                auto_now=True,
                help_text="Timestamp when this record was last modified",
            ),
        ),
    ]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                primary_key(),
                ("password", models.CharField(max_length=128, verbose_name="password")),
                (
                    "last_login",
                    models.DateTimeField(blank=True, null=True, verbose_name="last login"),
                ),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text=(
                            "Designates that this user has all permissions without "
                            "explicitly assigning them."
                        ),
                        verbose_name="superuser status",
                    ),
                ),
                (
                    "hidden_at",
                    models.DateTimeField(
                        blank=True,
                        db_index=True,
                        help_text="Timestamp when this record was hidden",
                        null=True,
                    ),
                ),
                (
                    "confirmed_hide_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="Timestamp when a moderator confirmed the hide",
                        null=True,
                    ),
                ),
                (
                    "username",
                    models.CharField(
                        blank=True,
                        db_index=True,
                        help_text="Public handle",
                        max_length=60,
                        null=True,
                    ),
                ),
                (
                    "email",
                    models.EmailField(
                        blank=True,
                        help_text="Login email address",
                        max_length=254,
                        null=True,
                        unique=True,
                    ),
                ),
                (
                    "unconfirmed_email",
                    models.EmailField(
                        blank=True,
                        help_text="New email address awaiting confirmation",
                        max_length=254,
                        null=True,
                    ),
                ),
                ("confirmed_at", models.DateTimeField(blank=True, null=True)),
                ("confirmation_token", models.CharField(blank=True, max_length=64, null=True)),
                ("reset_password_token", models.CharField(blank=True, max_length=64, null=True)),
                (
                    "email_verification_token",
                    models.CharField(blank=True, max_length=64, null=True),
                ),
                ("document_type", models.CharField(blank=True, max_length=20, null=True)),
                ("document_number", models.CharField(blank=True, max_length=50, null=True)),
                ("phone_number", models.CharField(blank=True, max_length=30, null=True)),
                ("confirmed_phone", models.CharField(blank=True, max_length=30, null=True)),
                ("official_position", models.CharField(blank=True, max_length=200, null=True)),
                (
                    "official_level",
                    models.PositiveSmallIntegerField(
                        default=0,
                        help_text="0 = not an official, 1-5 = official level",
                        validators=[
                            django.core.validators.MinValueValidator(0),
                            django.core.validators.MaxValueValidator(5),
                        ],
                    ),
                ),
                ("residence_verified_at", models.DateTimeField(blank=True, null=True)),
                ("level_two_verified_at", models.DateTimeField(blank=True, null=True)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                ("sign_in_count", models.PositiveIntegerField(default=0)),
                ("current_sign_in_at", models.DateTimeField(blank=True, null=True)),
                ("last_sign_in_at", models.DateTimeField(blank=True, null=True)),
                ("current_sign_in_ip", models.GenericIPAddressField(blank=True, null=True)),
                ("last_sign_in_ip", models.GenericIPAddressField(blank=True, null=True)),
                ("erased_at", models.DateTimeField(blank=True, null=True)),
                ("erase_reason", models.TextField(blank=True, null=True)),
                (
                    "locale",
                    models.CharField(
                        blank=True,
                        max_length=10,
                        null=True,
                        validators=[accounts.models.validate_available_locale],
                    ),
                ),
                ("public_activity", models.BooleanField(default=True)),
                ("newsletter", models.BooleanField(default=True)),
                ("email_on_comment", models.BooleanField(default=False)),
                ("email_on_comment_reply", models.BooleanField(default=False)),
                ("is_active", models.BooleanField(default=True)),
                ("is_staff", models.BooleanField(default=False)),
                ("date_joined", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text=(
                            "The groups this user belongs to. A user will get all "
                            "permissions granted to each of their groups."
                        ),
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "user",
                "verbose_name_plural": "users",
                "ordering": ["-date_joined"],
                "constraints": [
                    models.UniqueConstraint(
                        condition=models.Q(("document_number__isnull", False)),
                        fields=("document_type", "document_number"),
                        name="unique_document_per_type",
                    )
                ],
            },
            managers=[
                ("objects", accounts.managers.UserManager()),
                ("all_objects", accounts.managers.UserManager(include_hidden=True)),
            ],
        ),
        migrations.CreateModel(
            name="Administrator",
            fields=[
                primary_key(),
                *timestamps(),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="administrator",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "accounts_administrator",
            },
        ),
        migrations.CreateModel(
            name="Moderator",
            fields=[
                primary_key(),
                *timestamps(),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="moderator",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "accounts_moderator",
            },
        ),
        migrations.CreateModel(
            name="Organization",
            fields=[
                primary_key(),
                *timestamps(),
                ("name", models.CharField(max_length=60, unique=True)),
                ("responsible_name", models.CharField(max_length=60)),
                ("verified_at", models.DateTimeField(blank=True, null=True)),
                ("rejected_at", models.DateTimeField(blank=True, null=True)),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="organization",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "accounts_organization",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Lock",
            fields=[
                primary_key(),
                *timestamps(),
                ("tries", models.PositiveIntegerField(default=0)),
                (
                    "locked_until",
                    models.DateTimeField(default=accounts.models.default_locked_until),
                ),
                (
                    "user",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="lock",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "accounts_lock",
            },
        ),
        migrations.CreateModel(
            name="Identity",
            fields=[
                primary_key(),
                *timestamps(),
                ("provider", models.CharField(db_index=True, max_length=50)),
                ("uid", models.CharField(max_length=255)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="identities",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "accounts_identity",
                "verbose_name_plural": "identities",
                "constraints": [
                    models.UniqueConstraint(
                        fields=("provider", "uid"),
                        name="unique_provider_uid",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="FailedCensusCall",
            fields=[
                primary_key(),
                *timestamps(),
                ("document_number", models.CharField(blank=True, max_length=50)),
                ("document_type", models.CharField(blank=True, max_length=20)),
                ("date_of_birth", models.DateField(blank=True, null=True)),
                ("postal_code", models.CharField(blank=True, max_length=10)),
                (
                    "user",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="failed_census_calls",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "accounts_failed_census_call",
            },
        ),
    ]
