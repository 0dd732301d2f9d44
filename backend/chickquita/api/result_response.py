"""Result Responses — maps handler Results onto HTTP responses.

Invariants:
    - Failure bodies are always error.to_response(); status follows the error code
    - Success with a DTO -> JSON body; a list of DTOs -> JSON array;
      Success with bool -> {"success": value}
    - 204 responses carry no body
"""

from fastapi import Response, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from chickquita.core.errors import ErrorCode
from chickquita.core.result import Result

STATUS_BY_CODE = {
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.FAILURE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def to_http(result: Result, success_status: int = status.HTTP_200_OK) -> Response:
    if not result.ok:
        return JSONResponse(
            status_code=STATUS_BY_CODE[result.code],
            content=result.error.to_response(),
        )
    if success_status == status.HTTP_204_NO_CONTENT:
        return Response(status_code=success_status)
    value = result.value
    if isinstance(value, BaseModel):
        return JSONResponse(
            status_code=success_status, content=value.model_dump(mode="json"),
        )
    if isinstance(value, list):
        return JSONResponse(
            status_code=success_status,
            content=[item.model_dump(mode="json") for item in value],
        )
    return JSONResponse(status_code=success_status, content={"success": value})
