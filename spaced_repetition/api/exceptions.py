from rest_framework import exceptions, status
from rest_framework.views import exception_handler

from ..domain import errors


class StoreUnavailable(exceptions.APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Card store unavailable, try again later."
    default_code = "store_unavailable"


def review_exception_handler(exc, context):
    """Map scheduler errors onto DRF exceptions, then defer to the default handler."""
    if isinstance(exc, errors.NotFoundError):
        exc = exceptions.NotFound(str(exc))
    elif isinstance(exc, errors.ValidationError):
        exc = exceptions.ValidationError({"detail": str(exc)})
    elif isinstance(exc, errors.PersistenceError):
        exc = StoreUnavailable()
    return exception_handler(exc, context)
