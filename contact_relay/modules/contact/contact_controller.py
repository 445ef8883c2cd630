# contact_relay/modules/contact/contact_controller.py

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from contact_relay.common.config import Settings
from contact_relay.common.rate_limit import CONTACT_RATE_LIMIT, limiter
from contact_relay.common.utils.email_service import ResendClient
from contact_relay.common.utils.global_messages import GlobalMessages
from contact_relay.modules.contact import contact_service
from contact_relay.modules.contact.schemas import (
    ContactErrorResponse,
    ContactSubmission,
    ContactSuccessResponse,
)

logger = logging.getLogger(__name__)

MAX_BODY_BYTES = 200 * 1024

router = APIRouter(prefix="/contact", tags=["contact"])


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_email_client(request: Request) -> ResendClient:
    return request.app.state.email_client


def error_response(status_code: int, error) -> JSONResponse:
    return JSONResponse(
        ContactErrorResponse(error=error).model_dump(),
        status_code=status_code,
    )


def first_error_message(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return GlobalMessages.BAD_REQUEST
    error = errors[0]
    fields = [str(part) for part in error.get("loc", ()) if isinstance(part, str)]
    message = error.get("msg") or GlobalMessages.BAD_REQUEST
    return f"{'.'.join(fields)}: {message}" if fields else message


def body_too_large(request: Request) -> bool:
    content_length = request.headers.get("content-length")
    return content_length is not None and content_length.isdigit() and int(content_length) > MAX_BODY_BYTES


async def read_limited_body(request: Request) -> Optional[bytes]:
    """Read the body, stopping as soon as it passes MAX_BODY_BYTES (returns None)."""
    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > MAX_BODY_BYTES:
            return None
    return bytes(body)


@router.post(
    "",
    response_model=ContactSuccessResponse,
    responses={
        400: {"model": ContactErrorResponse},
        403: {"model": ContactErrorResponse},
        413: {"model": ContactErrorResponse},
        429: {"model": ContactErrorResponse},
        500: {"model": ContactErrorResponse},
    },
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": ContactSubmission.model_json_schema()}},
        }
    },
)
@limiter.limit(CONTACT_RATE_LIMIT)
async def submit_contact_form(
    request: Request,
    settings: Settings = Depends(get_settings),
    email_client: ResendClient = Depends(get_email_client),
):
    """
    Validate a contact form submission and forward it by email.

    The rate limit is checked before the body is read, so rejected callers
    never reach validation.
    """
    if body_too_large(request):
        return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, GlobalMessages.BODY_TOO_LARGE)

    try:
        body = await read_limited_body(request)
        if body is None:
            return error_response(status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, GlobalMessages.BODY_TOO_LARGE)

        submission = ContactSubmission.model_validate_json(body)
        result = await contact_service.process_contact_form(submission, settings, email_client)
    except ValidationError as e:
        return error_response(status.HTTP_400_BAD_REQUEST, first_error_message(e))
    except Exception as e:
        logger.warning("Contact submission failed: %s", e)
        return error_response(status.HTTP_400_BAD_REQUEST, str(e) or GlobalMessages.BAD_REQUEST)

    if not result.success:
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, result.error)

    return ContactSuccessResponse(id=result.email_id)
