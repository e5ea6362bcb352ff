"""
API версии 1.

Подключает роутеры приложений и обработчики исключений сервисов.
Коды ответов берутся из классов api.v1.exceptions:
    - ValidationError, InvalidTransition, UnknownStatus -> 400
    - PermissionDenied, Forbidden -> 403
    - ObjectDoesNotExist, OrderNotFound -> 404
    - DependencyUnavailable -> 503, поле retryable=true
"""

import logging

from django.core.exceptions import ObjectDoesNotExist, PermissionDenied, ValidationError
from ninja import NinjaAPI
from order.exceptions import DependencyUnavailable

from .auth.api import router as auth_router
from .exceptions import (
    NotFoundAPIError,
    PermissionAPIError,
    ServiceUnavailableAPIError,
    ValidationAPIError,
)
from .order.api import router as order_router
from .status.api import router as status_router

logger = logging.getLogger(__name__)

api = NinjaAPI(
    title="Galley API",
    version="1.0.0",
    description="""
    # Galley API Documentation

    ## Authentication
    All endpoints except token endpoints require JWT authentication.

    ## Error Codes
    - 400: Bad Request (validation error, invalid status transition)
    - 401: Unauthorized
    - 403: Forbidden (insufficient role)
    - 404: Not Found
    - 503: Service Unavailable (retryable)
    """,
    docs_url="/docs",  # URL для документации
    openapi_url="/openapi.json",  # URL для OpenAPI схемы
    urls_namespace="api_v1",
)


def _error_body(exc, detail):
    return {"detail": detail, "error": type(exc).__name__}


@api.exception_handler(ValidationError)
def validation_error(request, exc):
    body = _error_body(exc, ValidationAPIError.default_detail)
    if hasattr(exc, "error_dict"):
        body["errors"] = exc.message_dict
    else:
        body["detail"] = "; ".join(exc.messages)
    return api.create_response(request, body, status=ValidationAPIError.status_code)


@api.exception_handler(PermissionDenied)
def permission_denied(request, exc):
    return api.create_response(
        request,
        _error_body(exc, str(exc) or PermissionAPIError.default_detail),
        status=PermissionAPIError.status_code,
    )


@api.exception_handler(ObjectDoesNotExist)
def not_found(request, exc):
    return api.create_response(
        request,
        _error_body(exc, str(exc) or NotFoundAPIError.default_detail),
        status=NotFoundAPIError.status_code,
    )


@api.exception_handler(DependencyUnavailable)
def dependency_unavailable(request, exc):
    logger.warning("Запрос %s отклонен: %s", request.path, str(exc))
    body = _error_body(exc, str(exc) or ServiceUnavailableAPIError.default_detail)
    body["retryable"] = exc.retryable
    return api.create_response(
        request, body, status=ServiceUnavailableAPIError.status_code
    )


api.add_router("/auth/", auth_router)
api.add_router("/order/", order_router)
api.add_router("/status/", status_router)
