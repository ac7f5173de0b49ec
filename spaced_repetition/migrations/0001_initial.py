from django.db import migrations, models
import django.utils.timezone
import spaced_repetition.domain.cards


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ReviewCardRecord",
            fields=[
                (
                    "id",
                    models.CharField(
                        default=spaced_repetition.domain.cards.new_card_id,
                        editable=False,
                        max_length=32,
                        primary_key=True,
                        serialize=False,
                    ),
                ),
                ("owner_id", models.CharField(max_length=64)),
                ("source_ref", models.CharField(max_length=255)),
                ("ease_factor", models.FloatField(default=2.5)),
                ("interval", models.PositiveIntegerField(default=0)),
                ("repetitions", models.PositiveIntegerField(default=0)),
                ("next_review_date", models.DateTimeField(default=django.utils.timezone.now)),
                ("last_reviewed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "spaced_repetition_card",
                "indexes": [
                    models.Index(
                        fields=["owner_id", "next_review_date"], name="sr_card_owner_due_idx"
                    )
                ],
                "unique_together": {("owner_id", "source_ref")},
            },
        ),
    ]
