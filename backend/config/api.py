"""
Django Ninja API configuration.
"""

from django.http import HttpRequest, HttpResponse
from ninja import NinjaAPI

from apps.core.logging import get_logger
from apps.core.schemas import ErrorResponse
from apps.phone_number.api import router as phone_number_router
from apps.phone_number.exceptions import PhoneNumberError

logger = get_logger(__name__)

api = NinjaAPI(
    title="Phone Number Auth API",
    version="1.0.0",
    description="Phone number OTP verification, sign-in and password recovery.",
    openapi_extra={
        "info": {
            "contact": {"name": "API Support"},
        },
        "tags": [
            {
                "name": "Phone Number",
                "description": "OTP verification, phone + password sign-in and password reset",
            },
            {
                "name": "health",
                "description": "Service health and readiness checks",
            },
        ],
        "components": {
            "securitySchemes": {
                "bearerAuth": {
                    "type": "http",
                    "scheme": "bearer",
                    "description": "Session token from sign-in or phone verification. Include as: Authorization: Bearer <token>",
                }
            }
        },
    },
)

# Register routers
api.add_router("/auth", phone_number_router)


@api.exception_handler(PhoneNumberError)
def phone_number_error_handler(request: HttpRequest, exc: PhoneNumberError) -> HttpResponse:
    """Render phone number auth errors as ErrorResponse with their HTTP status."""
    if exc.status_code >= 500:
        logger.error("phone_number_error", code=exc.code, detail=str(exc), path=request.path)
    return api.create_response(
        request,
        ErrorResponse(detail=str(exc), code=exc.code).model_dump(),
        status=exc.status_code,
    )


@api.get("/health", tags=["health"], operation_id="healthCheck", summary="Health check")
def health_check(request: HttpRequest) -> dict:
    """Health check endpoint for load balancer."""
    return {"status": "ok"}
