# app/api/results.py

from fastapi.responses import JSONResponse

from app.models.results import CommandResult, ErrorKind

_STATUS_BY_ERROR = {
    ErrorKind.CONFLICT: 409,
    ErrorKind.CONSTRAINT: 409,
    ErrorKind.FAILURE: 500,
}


def command_response(result: CommandResult) -> JSONResponse:
    """Render a CommandResult with a status code matching its outcome."""
    status_code = 201 if result.success else _STATUS_BY_ERROR[result.error]
    return JSONResponse(
        status_code=status_code,
        content=result.model_dump(mode="json"),
    )
