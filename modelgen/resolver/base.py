"""Issue collection for the resolution passes."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class Severity(str, Enum):
    """Severity level of a resolution issue."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass
class ResolutionIssue:
    """A single problem found while resolving a model."""

    code: str
    message: str
    severity: Severity
    entity: str | None = None
    member: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def location(self) -> str:
        if not self.entity:
            return ""
        if self.member:
            return f"{self.entity}.{self.member}"
        return self.entity

    def __str__(self) -> str:
        location = f" [{self.location}]" if self.location else ""
        return f"{self.severity.value.upper()}: {self.code}{location} - {self.message}"


@dataclass
class ResolutionResult:
    """Issues collected by one or more resolution passes."""

    issues: list[ResolutionIssue] = field(default_factory=list)

    @property
    def errors(self) -> list[ResolutionIssue]:
        """Get all error-level issues."""
        return [i for i in self.issues if i.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[ResolutionIssue]:
        """Get all warning-level issues."""
        return [i for i in self.issues if i.severity == Severity.WARNING]

    @property
    def has_errors(self) -> bool:
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def is_valid(self) -> bool:
        """Check if the model resolved without errors."""
        return not self.has_errors

    def add_error(
        self,
        code: str,
        message: str,
        entity: str | None = None,
        member: str | None = None,
        **details: Any,
    ) -> None:
        """Add an error issue."""
        self.issues.append(
            ResolutionIssue(
                code=code,
                message=message,
                severity=Severity.ERROR,
                entity=entity,
                member=member,
                details=details,
            )
        )

    def add_warning(
        self,
        code: str,
        message: str,
        entity: str | None = None,
        member: str | None = None,
        **details: Any,
    ) -> None:
        """Add a warning issue."""
        self.issues.append(
            ResolutionIssue(
                code=code,
                message=message,
                severity=Severity.WARNING,
                entity=entity,
                member=member,
                details=details,
            )
        )

    def merge(self, other: "ResolutionResult") -> None:
        """Merge another result into this one."""
        self.issues.extend(other.issues)
