"""Runtime for synthesized models: records, persistence, resolvers, metrics."""

from .errors import (
    MissingHookError,
    MutationError,
    NotFoundError,
    QueryError,
    RepositoryError,
    ResolverError,
)
from .hooks import HookRegistry
from .metrics import MetricsRegistry
from .records import build_record_types
from .repository import Repository
from .resolvers import ResolverSet

__all__ = [
    "HookRegistry",
    "MetricsRegistry",
    "MissingHookError",
    "MutationError",
    "NotFoundError",
    "QueryError",
    "Repository",
    "RepositoryError",
    "ResolverError",
    "ResolverSet",
    "build_record_types",
]
