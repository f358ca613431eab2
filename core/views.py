# core/views.py
import logging

from django.db import DatabaseError, connection
from rest_framework import exceptions, status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import exception_handler
from drf_yasg.utils import swagger_auto_schema
from drf_yasg import openapi

from .errors import DomainError, NotFoundError

log = logging.getLogger(__name__)

health_response = openapi.Response(
    description="Service is up",
    schema=openapi.Schema(
        type=openapi.TYPE_OBJECT,
        properties={
            "status": openapi.Schema(type=openapi.TYPE_STRING, example="ok"),
            "database": openapi.Schema(type=openapi.TYPE_BOOLEAN, example=True),
        },
        required=["status", "database"],
    ),
)


def database_ok() -> bool:
    try:
        with connection.cursor() as c:
            c.execute("SELECT 1;")
            c.fetchone()
    except DatabaseError:
        log.exception("Health check could not reach the database")
        return False
    return True


@swagger_auto_schema(method="get", responses={200: health_response, 503: health_response})
@api_view(["GET"])
@permission_classes([AllowAny])
def health_view(request):
    ok_db = database_ok()
    return Response(
        {"status": "ok" if ok_db else "degraded", "database": ok_db},
        status=status.HTTP_200_OK if ok_db else status.HTTP_503_SERVICE_UNAVAILABLE,
    )


def domain_exception_handler(exc, context):
    """DRF exception handler that maps core.errors onto HTTP responses."""
    if isinstance(exc, NotFoundError):
        exc = exceptions.NotFound(exc.message)
    elif isinstance(exc, DomainError):
        exc = exceptions.ValidationError(exc.as_dict())
    return exception_handler(exc, context)
