from rest_framework import views, status
from rest_framework.response import Response
import structlog
import uuid
from ..services.cards import get_manager
from .serializers import (
    CardStatsSerializer,
    DueQuerySerializer,
    ExamImportSerializer,
    InitializationReportSerializer,
    InitializeCardsSerializer,
    ReviewBySourceInSerializer,
    ReviewCardSerializer,
    ReviewInSerializer,
)

base_logger = structlog.get_logger()


def bind_request_logger(**context):
    # Create a unique request_id
    return base_logger.bind(request_id=str(uuid.uuid4()), **context)


def report_response(logger, event, report):
    status_code = status.HTTP_201_CREATED if report.ok else status.HTTP_207_MULTI_STATUS
    logger.info(
        event,
        created=len(report.created),
        existing=len(report.existing),
        failed=len(report.failed),
        status=status_code,
    )
    return Response(InitializationReportSerializer(report).data, status=status_code)


class OwnerCardsView(views.APIView):
    def get(self, request, owner_id):
        logger = bind_request_logger(owner_id=owner_id)
        cards = get_manager().get_all_cards(owner_id)
        logger.info("all_cards_api_response", card_count=len(cards))
        return Response({"owner_id": owner_id, "cards": ReviewCardSerializer(cards, many=True).data})

    def post(self, request, owner_id):
        logger = bind_request_logger(owner_id=owner_id)

        s = InitializeCardsSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        report = get_manager().initialize_cards(owner_id, s.validated_data["source_refs"])
        return report_response(logger, "initialize_cards_api_response", report)


class ExamImportView(views.APIView):
    def post(self, request, owner_id):
        logger = bind_request_logger(owner_id=owner_id)

        s = ExamImportSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        report = get_manager().import_exam(
            owner_id, s.validated_data["exam_id"], s.validated_data["question_count"]
        )
        return report_response(logger, "exam_import_api_response", report)


class DueCardsView(views.APIView):
    def get(self, request, owner_id):
        logger = bind_request_logger(owner_id=owner_id)

        qs = DueQuerySerializer(data=request.query_params)
        qs.is_valid(raise_exception=True)
        as_of = qs.validated_data.get("as_of")

        cards = get_manager().get_due_cards(owner_id, as_of=as_of)

        logger.info(
            "due_cards_api_response",
            as_of_utc=as_of.isoformat() if as_of else None,
            card_count=len(cards),
        )

        return Response(
            {
                "owner_id": owner_id,
                "as_of": as_of.isoformat() if as_of else None,
                "cards": ReviewCardSerializer(cards, many=True).data,
            }
        )


class StatsView(views.APIView):
    def get(self, request, owner_id):
        logger = bind_request_logger(owner_id=owner_id)
        stats = get_manager().get_stats(owner_id)
        logger.info(
            "stats_api_response",
            due_today=stats.due_today,
            learned=stats.learned,
            total_cards=stats.total_cards,
        )
        return Response(CardStatsSerializer(stats).data)


class CardDetailView(views.APIView):
    def delete(self, request, owner_id, card_id):
        logger = bind_request_logger(owner_id=owner_id, card_id=card_id)
        strict = request.query_params.get("strict", "").lower() in ("1", "true", "yes")
        get_manager().delete_card(card_id, owner_id=owner_id, strict=strict)
        logger.info("delete_card_api_response", strict=strict, status=status.HTTP_204_NO_CONTENT)
        return Response(status=status.HTTP_204_NO_CONTENT)


class CardReviewView(views.APIView):
    def post(self, request, owner_id, card_id):
        logger = bind_request_logger(owner_id=owner_id, card_id=card_id)

        s = ReviewInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        rating = s.validated_data["rating"]

        card = get_manager().review_card(card_id, rating, owner_id=owner_id)

        # Log with request_id & relevant context
        logger.info(
            "review_api_response",
            rating=rating,
            interval_days=card.interval,
            next_review_utc=card.next_review_date.isoformat(),
            status=status.HTTP_200_OK,
        )
        return Response(ReviewCardSerializer(card).data, status=status.HTTP_200_OK)


class CardPreviewView(views.APIView):
    def get(self, request, owner_id, card_id):
        logger = bind_request_logger(owner_id=owner_id, card_id=card_id)
        intervals = get_manager().preview(card_id, owner_id=owner_id)
        logger.info("preview_api_response")
        return Response(
            {
                "card_id": card_id,
                "intervals": {rating.value: days for rating, days in intervals.items()},
            }
        )


class ReviewBySourceView(views.APIView):
    def post(self, request, owner_id):
        logger = bind_request_logger(owner_id=owner_id)

        s = ReviewBySourceInSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        source_ref = s.validated_data["source_ref"]
        rating = s.validated_data["rating"]

        card = get_manager().review_or_create(owner_id, source_ref, rating)

        logger.info(
            "review_or_create_api_response",
            card_id=card.id,
            source_ref=source_ref,
            rating=rating,
            interval_days=card.interval,
            next_review_utc=card.next_review_date.isoformat(),
            status=status.HTTP_200_OK,
        )
        return Response(ReviewCardSerializer(card).data, status=status.HTTP_200_OK)
