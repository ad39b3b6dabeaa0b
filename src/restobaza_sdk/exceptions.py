"""
Exception classes for Restobaza Python SDK

Every failure surfaced by the SDK is an ApiError carrying an integer code and
a description, whether it was reported by the Restobaza server, by the
transport, or by local validation.
"""

from typing import Optional, Dict, Any


class ErrorCodes:
    """Error codes produced locally by the SDK"""

    # Transport errors
    TRANSPORT_FAILED = 21
    DECODE_FAILED = 22

    # Validation errors
    MISSING_PARAMETER = 23
    RESERVED_PARAMETER = 24
    INVALID_SIGNATURE_PARAMETER = 25
    INVALID_CONFIG = 26

    # Test mode
    TEST_ERROR = 123456789


class ApiError(Exception):
    """
    Error raised for any failed API call

    Attributes:
        code: Error code (server-reported or one of ErrorCodes)
        description: Human readable description
        error: The error mapping this exception was built from
    """

    def __init__(self, code: int, description: str, error: Optional[Dict[str, Any]] = None):
        super().__init__(description)
        self.code = code
        self.description = description
        self.error = error if error is not None else {
            'error_code': code,
            'error_description': description,
        }

    @classmethod
    def from_response(cls, error: Dict[str, Any]) -> "ApiError":
        """
        Build an error from an error-shaped server payload.

        The code defaults to 0 when the payload carries none.
        """
        try:
            code = int(error.get('error_code', 0))
        except (TypeError, ValueError):
            code = 0
        return cls(code, str(error['error_description']), error=error)

    def __str__(self) -> str:
        return self.description

    def __repr__(self) -> str:
        return f"ApiError(code={self.code}, description='{self.description}')"


def missing_parameter(name: str) -> ApiError:
    return ApiError(ErrorCodes.MISSING_PARAMETER, f"missing required parameter: {name}")


def reserved_parameter(name: str) -> ApiError:
    return ApiError(ErrorCodes.RESERVED_PARAMETER, f"reserved parameter: {name}")
