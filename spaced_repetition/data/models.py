from django.db import models
from django.utils import timezone

from ..config import DEFAULT_EASE_FACTOR, MAX_OWNER_ID_LENGTH, MAX_SOURCE_REF_LENGTH
from ..domain.cards import new_card_id


class ReviewCardRecord(models.Model):
    id = models.CharField(max_length=32, primary_key=True, default=new_card_id, editable=False)
    owner_id = models.CharField(max_length=MAX_OWNER_ID_LENGTH)
    source_ref = models.CharField(max_length=MAX_SOURCE_REF_LENGTH)
    ease_factor = models.FloatField(default=DEFAULT_EASE_FACTOR)
    interval = models.PositiveIntegerField(default=0)      # days
    repetitions = models.PositiveIntegerField(default=0)
    next_review_date = models.DateTimeField(default=timezone.now)  # UTC
    last_reviewed_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(default=timezone.now)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "spaced_repetition_card"
        unique_together = (("owner_id", "source_ref"),)
        indexes = [
            models.Index(fields=["owner_id", "next_review_date"], name="sr_card_owner_due_idx"),
        ]

    def __str__(self):
        return f"{self.owner_id}:{self.source_ref}"
