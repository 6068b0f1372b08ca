"""HTTP error mapping for use case errors"""

from typing import Optional
from fastapi import Request, status
from fastapi.responses import JSONResponse
from libs.result import Error
from src.app.errors import ErrorCode

ERROR_STATUS_CODES = {
    ErrorCode.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.ALREADY_CONNECTED: status.HTTP_409_CONFLICT,
    ErrorCode.STATE_MISMATCH: status.HTTP_400_BAD_REQUEST,
    ErrorCode.NOT_CONFIGURED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorCode.BANKING_ERROR: status.HTTP_502_BAD_GATEWAY,
    ErrorCode.PERSISTENCE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ClientError(Exception):
    """
    Raised by routes to return a use case error to the client

    The status code defaults to the one mapped for the error code.
    """

    def __init__(self, error: Error, status_code: Optional[int] = None):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code or ERROR_STATUS_CODES.get(
            error.code, status.HTTP_400_BAD_REQUEST
        )


async def client_error_handler(request: Request, exc: ClientError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error.model_dump()},
    )
