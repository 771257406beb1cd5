"""
Error hierarchy for schema validation, rendering and publishing.
"""
from typing import Any, Dict, List, Optional


class AppException(Exception):
    """Base exception class for application-specific errors."""

    def __init__(
        self,
        error_code: str,
        message: str,
        details: Optional[Dict[str, Any]] = None
    ):
        self.error_code = error_code
        self.message = message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class SchemaError(AppException):
    """Raised when a raw page schema is rejected before normalization."""


class SchemaNotJSONError(SchemaError):
    """Raised when the raw schema cannot be parsed as JSON."""
    def __init__(self, reason: str):
        super().__init__(
            error_code="SCHEMA_NOT_JSON",
            message="schema is not valid JSON",
            details={"reason": reason}
        )


class SchemaMismatchError(SchemaError):
    """Raised when the parsed schema fails the bundled JSON-Schema."""
    def __init__(self, errors: List[str]):
        super().__init__(
            error_code="SCHEMA_MISMATCH",
            message="schema does not match specification",
            details={"errors": errors}
        )

    @property
    def errors(self) -> List[str]:
        return self.details.get("errors", [])


class SchemaCompilationError(AppException):
    """Raised at startup when the bundled JSON-Schema cannot be loaded."""
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(
            error_code="SCHEMA_COMPILATION_ERROR",
            message=message,
            details={"path": path} if path else {}
        )


class RenderError(AppException):
    """Raised when a static build cannot be produced."""
    def __init__(self, message: str, stage: str, project_id: Optional[str] = None):
        details: Dict[str, Any] = {"stage": stage}
        if project_id:
            details["project_id"] = project_id
        super().__init__(
            error_code="RENDER_ERROR",
            message=message,
            details=details
        )

    @property
    def stage(self) -> str:
        return self.details["stage"]


class PublishError(AppException):
    """Raised when a build cannot be uploaded or served."""
    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            error_code="PUBLISH_ERROR",
            message=message,
            details=details
        )


class GenerationError(AppException):
    """Raised when the AI collaborator fails to produce a schema."""
    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(
            error_code="GENERATION_ERROR",
            message=message,
            details={"provider": provider} if provider else {}
        )
