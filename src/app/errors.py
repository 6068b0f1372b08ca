"""Error codes shared by use cases and the API layer"""

from libs.result import Error


class ErrorCode:
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    PERSISTENCE_ERROR = "PERSISTENCE_ERROR"
    ALREADY_CONNECTED = "ALREADY_CONNECTED"
    NOT_CONFIGURED = "NOT_CONFIGURED"
    STATE_MISMATCH = "STATE_MISMATCH"
    BANKING_ERROR = "BANKING_ERROR"


def forbidden(message: str) -> Error:
    return Error(
        code=ErrorCode.FORBIDDEN,
        message=message,
        reason="Caller lacks the superadmin role",
    )


def not_found(message: str) -> Error:
    return Error(
        code=ErrorCode.NOT_FOUND,
        message=message,
        reason="Resource does not exist or belongs to another company",
    )


def validation_error(message: str, reason: str = "Invalid input") -> Error:
    return Error(code=ErrorCode.VALIDATION_ERROR, message=message, reason=reason)


def persistence_error(message: str, exc: Exception) -> Error:
    return Error(code=ErrorCode.PERSISTENCE_ERROR, message=message, reason=str(exc))
