import logging
import traceback

from django.conf import settings
from ninja_extra import NinjaExtraAPI
from ninja.errors import AuthenticationError as NinjaAuthenticationError
from ninja.errors import ValidationError as NinjaValidationError

from src.core.apis import build_envelope
from src.core.exceptions import (
    DiscoveryError,
    InvalidOriginURLError,
    KeyMaterialError,
)

logger = logging.getLogger(__name__)


def attach_exception_handlers(api: NinjaExtraAPI) -> None:
    def _envelope(request, *, message: str, status: int, code: str, data=None, errors=None, extra=None,):
        return api.create_response(
            request,
            build_envelope(request, message=message, status=status, code=code, data=data,
                           errors=errors, extra=extra),
            status=status,
        )

    @api.exception_handler(InvalidOriginURLError)
    def on_invalid_origin(request, exc: InvalidOriginURLError):
        return _envelope(
            request,
            message=exc.message,
            status=422,
            code="INVALID_ORIGIN_URL",
            extra=exc.extra,
        )

    @api.exception_handler(DiscoveryError)
    def on_discovery_error(request, exc: DiscoveryError):
        return _envelope(
            request,
            message="AMP cache discovery failed",
            status=502,
            code="CACHE_DISCOVERY_FAILED",
            errors=exc.message,
            extra=exc.extra,
        )

    @api.exception_handler(KeyMaterialError)
    def on_key_material_error(request, exc: KeyMaterialError):
        # key paths and PEM details stay in the logs
        logger.error("Signing keys unavailable: %s", exc.message)
        return _envelope(
            request,
            message="Signing keys unavailable",
            status=503,
            code="SIGNING_KEYS_UNAVAILABLE",
        )

    @api.exception_handler(NinjaAuthenticationError)
    def on_authentication_error(request, exc: NinjaAuthenticationError):
        return _envelope(
            request,
            message="Unauthorized",
            status=401,
            code="UNAUTHORIZED",
        )

    @api.exception_handler(NinjaValidationError)
    def on_ninja_validation_error(request, exc: NinjaValidationError):
        return _envelope(
            request,
            message="Validation error",
            status=422,
            code="VALIDATION_ERROR",
            errors=exc.errors,
        )

    @api.exception_handler(Exception)
    def on_unexpected_error(request, exc: Exception):
        err = None
        extra = {}
        logger.exception("Unhandled API error")
        if settings.DEBUG:
            err = str(exc)
            extra["trace"] = traceback.format_exc(limit=20)
        return _envelope(
            request,
            message="Unexpected error",
            status=500,
            code="INTERNAL_ERROR",
            errors=err,
            extra=extra if settings.DEBUG else None,
        )
