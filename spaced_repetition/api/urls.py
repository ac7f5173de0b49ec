from django.urls import path
from .views import (
    CardDetailView,
    CardPreviewView,
    CardReviewView,
    DueCardsView,
    ExamImportView,
    OwnerCardsView,
    ReviewBySourceView,
    StatsView,
)

urlpatterns = [
    path("users/<str:owner_id>/cards", OwnerCardsView.as_view(), name="cards"),
    path("users/<str:owner_id>/cards/<str:card_id>", CardDetailView.as_view(), name="card-detail"),
    path("users/<str:owner_id>/cards/<str:card_id>/reviews", CardReviewView.as_view(), name="card-review"),
    path("users/<str:owner_id>/cards/<str:card_id>/preview", CardPreviewView.as_view(), name="card-preview"),
    path("users/<str:owner_id>/exams", ExamImportView.as_view(), name="exam-import"),
    path("users/<str:owner_id>/due-cards", DueCardsView.as_view(), name="due-cards"),
    path("users/<str:owner_id>/stats", StatsView.as_view(), name="stats"),
    path("users/<str:owner_id>/reviews", ReviewBySourceView.as_view(), name="review"),
]
