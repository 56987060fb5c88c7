# plant_care/core/errors.py
"""
Domain error types shared by the services, repositories and routes.

Every error carries the HTTP status code and the error_code string that the
API returns, so a route (or the global handler in create_app) can turn it
into a response with `jsonify(err.to_dict()), err.status_code`.
"""
from typing import Any, Dict, Optional


class PlantCareError(Exception):
    """Base class for all expected failures of the plant care service."""
    status_code = 500
    error_code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        if error_code:
            self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        body = {"error_code": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class NotFoundError(PlantCareError):
    status_code = 404
    error_code = "PLANT_NOT_FOUND"


class InvalidDataError(PlantCareError):
    """Missing required field, non-positive interval or unknown action type."""
    status_code = 400
    error_code = "VALIDATION_ERROR"


class ConflictError(PlantCareError):
    """The care action was already performed today; carries the existing record."""
    status_code = 409
    error_code = "ALREADY_PERFORMED"

    def __init__(self, message: str, existing: Any = None, error_code: Optional[str] = None):
        super().__init__(message, error_code=error_code)
        self.existing = existing

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.existing is not None:
            body["existingAction"] = self.existing.to_dict()
        return body


class StorageError(PlantCareError):
    """Backend unreachable or persisted data malformed."""
    status_code = 503
    error_code = "STORAGE_ERROR"


class ConfigurationError(PlantCareError):
    """Required connection settings for the selected backend are missing."""
    status_code = 500
    error_code = "CONFIGURATION_ERROR"
