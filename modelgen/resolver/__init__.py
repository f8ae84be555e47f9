"""Resolution passes that turn a parsed model into a resolved one."""

from .base import ResolutionIssue, ResolutionResult, Severity
from .naming import lower_camel, snake_case
from .operations import DEFAULT_OPERATIONS, resolve_operations
from .pipeline import ResolvedModel, resolve_model, resolve_model_file, run_passes
from .traits import TRAITS, expand_traits
from .types import resolve_types

__all__ = [
    "ResolutionIssue",
    "ResolutionResult",
    "Severity",
    "lower_camel",
    "snake_case",
    "DEFAULT_OPERATIONS",
    "resolve_operations",
    "ResolvedModel",
    "resolve_model",
    "resolve_model_file",
    "run_passes",
    "TRAITS",
    "expand_traits",
    "resolve_types",
]
