from django.urls import include, path

urlpatterns = [
    path("", include("spaced_repetition.api.urls")),
]
