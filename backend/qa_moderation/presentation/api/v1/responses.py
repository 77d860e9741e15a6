"""Rendering of ``ActionResult`` values as JSON responses."""

from fastapi import status
from fastapi.responses import JSONResponse

from qa_moderation.application.schemas import ActionResponse
from qa_moderation.domain.results import ActionResult, ErrorKind

ERROR_STATUS = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.VALIDATION: 422,
    ErrorKind.NO_OP: status.HTTP_409_CONFLICT,
    ErrorKind.PERSISTENCE: status.HTTP_503_SERVICE_UNAVAILABLE,
    ErrorKind.RATE_LIMITED: status.HTTP_429_TOO_MANY_REQUESTS,
}


def action_response(result: ActionResult) -> JSONResponse:
    """Success is a 200 with a redirect; each failure kind has its own status code."""
    if result.ok:
        body = ActionResponse(
            status="success",
            message=result.message,
            redirect_url=result.redirect_url,
        )
        return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(exclude_none=True))

    body = ActionResponse(status="error", message=result.message, error=result.error.value)
    return JSONResponse(status_code=ERROR_STATUS[result.error], content=body.model_dump(exclude_none=True))
