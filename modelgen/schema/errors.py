"""Schema-related exceptions."""

from typing import Any


class SchemaLoadError(Exception):
    """Raised when a model document cannot be loaded."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class SchemaValidationError(Exception):
    """Raised when a model document fails schema validation."""

    def __init__(self, message: str, errors: list[dict] | None = None):
        self.errors = errors or []
        super().__init__(message)


class ModelError(Exception):
    """Raised when a model cannot be resolved.

    Carries every issue found during resolution, so that all configuration
    problems are reported together.
    """

    def __init__(self, message: str, issues: list[Any] | None = None):
        self.issues = issues or []
        super().__init__(message)


class InvalidOperationError(ModelError):
    """Raised when an entity declares an unsupported operation."""

    def __init__(self, entity: str, operation: str):
        self.entity = entity
        self.operation = operation
        super().__init__(
            f"Entity '{entity}' declares unsupported operation '{operation}'"
        )


class NestedUnionError(ModelError):
    """Raised when a union references another union."""

    def __init__(self, type_name: str, referenced: str):
        self.type_name = type_name
        self.referenced = referenced
        super().__init__(
            f"Union '{type_name}' references union '{referenced}'; "
            "only enums and literal values can be flattened"
        )
