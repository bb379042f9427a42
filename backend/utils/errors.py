# backend/utils/errors.py
from typing import Any, Dict, List, Optional


# Base class for errors that map directly onto a client-facing HTTP status
class AppError(Exception):
    status_code: int = 400
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_body(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.details:
            body["details"] = self.details
        return body


# No resolvable identity
class Unauthorized(AppError):
    status_code = 401
    default_message = "Unauthorized"


# Identity resolved but not allowed to see or touch the row
class PermissionDenied(AppError):
    status_code = 403
    default_message = "Permission denied"


# Row genuinely does not exist
class NotFound(AppError):
    status_code = 404
    default_message = "Not found"


# Malformed input, optionally with field-level messages
class ValidationFailed(AppError):
    status_code = 400
    default_message = "Validation failed"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationFailed":
        return cls(f"{field}: {message}", details=[{"field": field, "message": message}])


# State conflicts such as a second pending account deletion
class Conflict(AppError):
    status_code = 400
    default_message = "Conflict"


# An external collaborator (scheduler) refused or failed the request
class ServiceUnavailable(AppError):
    status_code = 503
    default_message = "Service unavailable"
