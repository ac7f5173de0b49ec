from rest_framework import serializers

from ..domain.enums import Rating

RATING_CHOICES = [r.value for r in Rating]


class ReviewInSerializer(serializers.Serializer):
    rating = serializers.ChoiceField(choices=RATING_CHOICES)


class ReviewBySourceInSerializer(serializers.Serializer):
    source_ref = serializers.CharField(max_length=255)
    rating = serializers.ChoiceField(choices=RATING_CHOICES)


class InitializeCardsSerializer(serializers.Serializer):
    source_refs = serializers.ListField(
        child=serializers.CharField(max_length=255), allow_empty=False
    )


class ExamImportSerializer(serializers.Serializer):
    exam_id = serializers.CharField(max_length=200)
    question_count = serializers.IntegerField(min_value=0)


class DueQuerySerializer(serializers.Serializer):
    as_of = serializers.DateTimeField(required=False)  # ISO-8601


class ReviewCardSerializer(serializers.Serializer):
    id = serializers.CharField()
    owner_id = serializers.CharField()
    source_ref = serializers.CharField()
    ease_factor = serializers.FloatField()
    interval = serializers.IntegerField()
    repetitions = serializers.IntegerField()
    next_review_date = serializers.DateTimeField()
    last_reviewed_at = serializers.DateTimeField(allow_null=True)


class CardStatsSerializer(serializers.Serializer):
    due_today = serializers.IntegerField()
    learned = serializers.IntegerField()
    total_cards = serializers.IntegerField()


class InitializationReportSerializer(serializers.Serializer):
    created = serializers.ListField(child=serializers.CharField())
    existing = serializers.ListField(child=serializers.CharField())
    failed = serializers.DictField(child=serializers.CharField())
