from .data.models import ReviewCardRecord  # noqa: F401
