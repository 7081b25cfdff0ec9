from typing import Any, Dict, List, Optional


class StepflowError(Exception):
    """Base class for errors that map onto an HTTP error response."""

    status_code = 500

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"message": self.message}
        if self.errors:
            body["errors"] = self.errors
        return body


class NotFoundError(StepflowError):
    status_code = 404


class ValidationFailedError(StepflowError):
    status_code = 400


class InternalError(StepflowError):
    status_code = 500

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)
