from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

FALLBACK_STATUS = 500
FALLBACK_MESSAGE = "Internal server error"


def envelope(status_code: int, message: Any, *, token: str | None = None, data: Any = None) -> JSONResponse:
    """Build the ``{status, message, token?, data?}`` body every endpoint returns."""
    body: dict[str, Any] = {"status": status_code, "message": message}
    if token is not None:
        body["token"] = token
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return JSONResponse(status_code=status_code, content=body)


def fallback_response() -> JSONResponse:
    return envelope(FALLBACK_STATUS, FALLBACK_MESSAGE)
