"""
Custom application exceptions
"""

from typing import Optional, Dict, Any


class GrooveException(Exception):
    """Base exception for the Groove application"""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: int = 400,
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": False,
            "error": {
                "code": self.code,
                "message": self.message,
                "details": self.details
            }
        }


class AuthenticationError(GrooveException):
    """Authentication related errors"""

    def __init__(self, message: str = "Authentication failed", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="AUTH_ERROR",
            status_code=401,
            details=details
        )


class AuthorizationError(GrooveException):
    """Authorization related errors"""

    def __init__(self, message: str = "Not authorized", details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="AUTH_FORBIDDEN",
            status_code=403,
            details=details
        )


class NotFoundError(GrooveException):
    """Resource not found errors"""

    def __init__(self, resource: str, identifier: Any = None):
        message = f"{resource} not found"
        if identifier:
            message = f"{resource} with id {identifier} not found"
        super().__init__(
            message=message,
            code="NOT_FOUND",
            status_code=404
        )


class ValidationError(GrooveException):
    """Validation errors"""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class ConflictError(GrooveException):
    """Resource conflict errors"""

    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(
            message=message,
            code="CONFLICT",
            status_code=409,
            details=details
        )


class BookingError(GrooveException):
    """Booking related errors"""

    def __init__(
        self,
        message: str,
        code: str = "BOOKING_ERROR",
        status_code: int = 400,
        details: Optional[Dict] = None
    ):
        super().__init__(
            message=message,
            code=code,
            status_code=status_code,
            details=details
        )


class DatesUnavailableError(BookingError):
    """Requested dates already on the artist's calendar"""

    def __init__(self, dates: list):
        super().__init__(
            message="Selected dates are no longer available",
            code="DATES_UNAVAILABLE",
            status_code=409,
            details={"unavailable_dates": dates}
        )


class InvalidPinError(BookingError):
    """Submitted check-in code does not match the booking"""

    def __init__(self, booking_id: str):
        super().__init__(
            message="Invalid confirmation code",
            code="INVALID_PIN",
            details={"booking_id": booking_id}
        )


class AlreadyCheckedInError(BookingError):
    """Artist presence was already confirmed"""

    def __init__(self, booking_id: str):
        super().__init__(
            message="Presence already confirmed for this booking",
            code="ALREADY_CHECKED_IN",
            status_code=409,
            details={"booking_id": booking_id}
        )
