import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("core_vote_store", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="ParticipantLock",
            fields=[
                (
                    "participant_id",
                    models.CharField(max_length=255, primary_key=True, serialize=False),
                ),
                ("locked_at", models.DateTimeField()),
            ],
            options={
                "db_table": "agora_participant_locks",
            },
        ),
        migrations.CreateModel(
            name="Favorite",
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
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "session",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="favorites",
                        to="core_vote_store.session",
                    ),
                ),
            ],
            options={
                "db_table": "agora_favorites",
                "ordering": ["participant_id", "created_at", "id"],
                "constraints": [
                    models.UniqueConstraint(
                        fields=("participant_id", "session"),
                        name="uniq_favorite_participant_session",
                    ),
                ],
            },
        ),
    ]
