"""Exception types and the handlers that turn them into problem responses."""
import logging

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from myskool.utils.header_util import create_failure_alert

logger = logging.getLogger("myskool.errors")

# RFC 7807 problem details
DEFAULT_TYPE = "about:blank"
CONSTRAINT_VIOLATION_TYPE = "about:blank#constraint-violation"
PROBLEM_MEDIA_TYPE = "application/problem+json"


class BadRequestAlertException(HTTPException):
    """A 400 caused by a client-supplied identifier, tagged with entity and error key."""

    def __init__(self, title: str, entity_name: str, error_key: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=title,
            headers=create_failure_alert(entity_name, error_key),
        )
        self.title = title
        self.entity_name = entity_name
        self.error_key = error_key


async def bad_request_alert_handler(request: Request, exc: BadRequestAlertException):
    logger.warning("%s %s -> 400 %s (%s)", request.method, request.url.path, exc.error_key, exc.title)
    return JSONResponse(
        status_code=exc.status_code,
        headers=exc.headers,
        media_type=PROBLEM_MEDIA_TYPE,
        content={
            "type": DEFAULT_TYPE,
            "title": exc.title,
            "status": exc.status_code,
            "message": f"error.{exc.error_key}",
            "entityName": exc.entity_name,
            "errorKey": exc.error_key,
            "params": exc.entity_name,
        },
    )


def _field_error(error: dict) -> dict:
    # loc looks like ("body", "title") or ("query", "page")
    loc = [str(part) for part in error.get("loc", ())]
    object_name = loc[0] if loc else ""
    field = ".".join(loc[1:]) if len(loc) > 1 else object_name
    return {"objectName": object_name, "field": field, "message": error.get("msg", "")}


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    field_errors = [_field_error(e) for e in exc.errors()]
    logger.info("%s %s -> 400 validation: %s", request.method, request.url.path, field_errors)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        media_type=PROBLEM_MEDIA_TYPE,
        content={
            "type": CONSTRAINT_VIOLATION_TYPE,
            "title": "Method argument not valid",
            "status": status.HTTP_400_BAD_REQUEST,
            "message": "error.validation",
            "fieldErrors": field_errors,
        },
    )
