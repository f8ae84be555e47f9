"""Output formatting for modelgen."""

from .formatter import format_artifacts, format_resolution_result

__all__ = ["format_artifacts", "format_resolution_result"]
