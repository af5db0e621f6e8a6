import django.db.models.deletion
import django.db.models.manager
from django.conf import settings
from django.db import migrations, models


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


def hide_fields():
    return [
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
    ]


def primary_key():
    return (
        "id",
        models.BigAutoField(
            auto_created=True, primary_key=True, serialize=False, verbose_name="ID"
        ),
    )


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("contenttypes", "0002_remove_content_type_name"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Debate",
            fields=[
                primary_key(),
                *hide_fields(),
                *timestamps(),
                ("title", models.CharField(max_length=80)),
                ("description", models.TextField(blank=True)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="debates",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "participation_debate",
                "ordering": ["-created_at"],
                "abstract": False,
                "default_manager_name": "all_objects",
            },
            managers=[
                ("all_objects", django.db.models.manager.Manager()),
            ],
        ),
        migrations.CreateModel(
            name="Proposal",
            fields=[
                primary_key(),
                *hide_fields(),
                *timestamps(),
                ("title", models.CharField(max_length=80)),
                ("summary", models.TextField(blank=True, max_length=200)),
                ("description", models.TextField(blank=True)),
                (
                    "author",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="proposals",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "participation_proposal",
                "ordering": ["-created_at"],
                "abstract": False,
                "default_manager_name": "all_objects",
            },
            managers=[
                ("all_objects", django.db.models.manager.Manager()),
            ],
        ),
        migrations.CreateModel(
            name="Comment",
            fields=[
                primary_key(),
                *hide_fields(),
                *timestamps(),
                ("commentable_id", models.PositiveBigIntegerField()),
                ("body", models.TextField()),
                (
                    "commentable_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="comments",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "participation_comment",
                "ordering": ["-created_at"],
                "abstract": False,
                "default_manager_name": "all_objects",
                "indexes": [
                    models.Index(
                        fields=["commentable_type", "commentable_id"],
                        name="participation_commentable_idx",
                    )
                ],
            },
            managers=[
                ("all_objects", django.db.models.manager.Manager()),
            ],
        ),
        migrations.CreateModel(
            name="Vote",
            fields=[
                primary_key(),
                *timestamps(),
                ("votable_id", models.PositiveBigIntegerField()),
                ("vote_flag", models.BooleanField(default=True)),
                ("vote_weight", models.PositiveIntegerField(default=1)),
                (
                    "votable_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
                (
                    "voter",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="votes",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "participation_vote",
                "ordering": ["-created_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("voter", "votable_type", "votable_id"),
                        name="unique_vote_per_voter",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Flag",
            fields=[
                primary_key(),
                *timestamps(),
                ("flaggable_id", models.PositiveBigIntegerField()),
                (
                    "flaggable_type",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        to="contenttypes.contenttype",
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="flags",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "participation_flag",
                "ordering": ["-created_at"],
                "abstract": False,
                "constraints": [
                    models.UniqueConstraint(
                        fields=("user", "flaggable_type", "flaggable_id"),
                        name="unique_flag_per_user",
                    )
                ],
            },
        ),
    ]
