import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Session",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("title", models.CharField(max_length=200)),
                ("description", models.TextField(blank=True, null=True)),
                (
                    "format",
                    models.CharField(
                        choices=[
                            ("talk", "Talk"),
                            ("workshop", "Workshop"),
                            ("discussion", "Discussion"),
                            ("panel", "Panel"),
                            ("demo", "Demo"),
                        ],
                        max_length=20,
                    ),
                ),
                ("duration", models.PositiveSmallIntegerField()),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("pending", "Pending"),
                            ("approved", "Approved"),
                            ("rejected", "Rejected"),
                            ("scheduled", "Scheduled"),
                        ],
                        default="pending",
                        max_length=20,
                    ),
                ),
                ("host_id", models.CharField(max_length=255)),
                ("host_name", models.CharField(max_length=255)),
                ("topic_tags", models.JSONField(default=list)),
                ("is_self_hosted", models.BooleanField(default=False)),
                (
                    "custom_location",
                    models.CharField(blank=True, max_length=255, null=True),
                ),
                ("total_votes", models.PositiveIntegerField(default=0)),
                ("voter_count", models.PositiveIntegerField(default=0)),
                ("total_credits", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "db_table": "agora_sessions",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["status", "total_votes"],
                        name="idx_session_status_votes",
                    )
                ],
            },
        ),
        migrations.CreateModel(
            name="Vote",
            fields=[
                (
                    "id",
                    models.UUIDField(
                        default=uuid.uuid4,
                        editable=False,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("participant_id", models.CharField(db_index=True, max_length=255)),
                ("vote_count", models.PositiveIntegerField()),
                ("credits_spent", models.PositiveIntegerField()),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="votes",
                        to="core_vote_store.session",
                    ),
                ),
            ],
            options={
                "db_table": "agora_votes",
                "ordering": ["participant_id", "session_id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("participant_id", "session"),
                        name="uniq_vote_participant_session",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(vote_count__gt=0),
                        name="chk_vote_count_positive",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            credits_spent=models.F("vote_count") * models.F("vote_count")
                        ),
                        name="chk_vote_credits_quadratic",
                    ),
                ],
            },
        ),
    ]
