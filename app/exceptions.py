"""
Domain errors raised by services and crud helpers.

Routers let these propagate; the handlers registered in app.main turn them
into the JSON envelope ``{"success": false, "message": ..., "error": ...}``.
"""

from typing import Optional


class TutorMitraError(Exception):
    status_code = 500
    default_message = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        self.message = message or self.default_message
        self.error = error
        super().__init__(self.message)

    def to_dict(self) -> dict:
        body = {"success": False, "message": self.message}
        if self.error:
            body["error"] = self.error
        return body


class ValidationError(TutorMitraError):
    status_code = 400
    default_message = "Invalid request"


class InvalidStatus(TutorMitraError):
    status_code = 400
    default_message = "Invalid status"


class InvalidTransition(InvalidStatus):
    default_message = "Status transition not allowed"


class SignatureMismatch(TutorMitraError):
    status_code = 400
    default_message = "Payment signature mismatch"


class Unauthenticated(TutorMitraError):
    status_code = 401
    default_message = "Authentication required"


class PermissionDenied(TutorMitraError):
    status_code = 403
    default_message = "Not authorized"


class NotFound(TutorMitraError):
    status_code = 404
    default_message = "Not found"


class ConcurrentUpdate(TutorMitraError):
    status_code = 409
    default_message = "Booking was modified by another request, reload and retry"


class PaymentGatewayError(TutorMitraError):
    status_code = 502
    default_message = "Payment gateway unavailable"
