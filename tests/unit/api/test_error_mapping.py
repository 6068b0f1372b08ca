"""Unit tests for the use case error to HTTP status mapping"""

from fastapi import status

from libs.result import Error
from src.api.error import ERROR_STATUS_CODES, ClientError
from src.app.errors import ErrorCode


def error_codes():
    return {
        value for name, value in vars(ErrorCode).items()
        if not name.startswith("_")
    }


class TestErrorStatusMapping:
    """Every error code a use case can return has exactly one HTTP status"""

    def test_mapping_covers_exactly_the_declared_codes(self):
        """Test no code is unmapped and no mapping refers to an undeclared code"""
        # Assert
        assert set(ERROR_STATUS_CODES) == error_codes()

    def test_lost_schedule_race_has_no_error_code(self):
        """Test a lost scheduler race is reported as a skipped item, not as an error code"""
        # Assert
        assert not any("SCHEDULE" in code for code in error_codes())

    def test_client_error_uses_mapped_status(self):
        """Test ClientError picks the mapped status when none is given"""
        # Arrange
        error = Error(code=ErrorCode.ALREADY_CONNECTED, message="Already connected")

        # Act
        exc = ClientError(error)

        # Assert
        assert exc.status_code == status.HTTP_409_CONFLICT
