"""Output formatting for resolution results and artifact plans."""

import json
from typing import Any, Literal

from ..resolver.base import ResolutionIssue, ResolutionResult, Severity
from ..synth.models import ArtifactGroup, RelationResolver, SynthesisResult


def format_resolution_result(
    result: ResolutionResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format a resolution result for output.

    Args:
        result: The resolution result to format.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(result)
    return _format_text(result)


def _format_text(result: ResolutionResult) -> str:
    """Format result as human-readable text."""
    lines: list[str] = []

    errors = result.errors
    warnings = result.warnings

    # Errors section
    lines.append("ERRORS:")
    if errors:
        for issue in errors:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    lines.append("")

    # Warnings section
    lines.append("WARNINGS:")
    if warnings:
        for issue in warnings:
            lines.append(f"  {_format_issue_text(issue)}")
    else:
        lines.append("  (none)")

    # Summary
    lines.append("")
    if result.is_valid:
        if warnings:
            lines.append(f"Model is valid with {len(warnings)} warning(s)")
        else:
            lines.append("Model is valid")
    else:
        lines.append(
            f"Model is invalid: {len(errors)} error(s), {len(warnings)} warning(s)"
        )

    return "\n".join(lines)


def _format_issue_text(issue: ResolutionIssue) -> str:
    """Format a single issue as text."""
    location = f"[{issue.location}] " if issue.location else ""

    if issue.severity == Severity.ERROR:
        symbol = "✘"
    elif issue.severity == Severity.WARNING:
        symbol = "⚠"
    else:
        symbol = "ℹ"

    return f"{symbol} {issue.code}: {location}{issue.message}"


def _issue_dict(issue: ResolutionIssue) -> dict[str, Any]:
    return {
        "code": issue.code,
        "message": issue.message,
        "severity": issue.severity.value,
        "entity": issue.entity,
        "member": issue.member,
        "details": issue.details,
    }


def _format_json(result: ResolutionResult) -> str:
    """Format result as JSON."""
    data = {
        "valid": result.is_valid,
        "error_count": len(result.errors),
        "warning_count": len(result.warnings),
        "issues": [_issue_dict(issue) for issue in result.issues],
    }
    return json.dumps(data, indent=2)


def group_dict(group: ArtifactGroup) -> dict[str, Any]:
    """Plain data view of an artifact group."""
    return {
        "kind": group.kind.value,
        "name": group.name,
        "resolver": group.resolver,
        "function": group.function,
        "wire": group.wire.signature(),
        "storage": {"sql": group.storage.sql, "params": group.storage.params},
        "metrics": [m.name for m in group.metrics()],
        "steps": [
            {"kind": s.kind.value, "function": s.function, "member": s.member}
            for s in group.steps
        ],
    }


def relation_dict(resolver: RelationResolver) -> dict[str, Any]:
    return {
        "relation": resolver.relation,
        "target": resolver.target,
        "function": resolver.function,
        "many": resolver.many,
        "metrics": [m.name for m in resolver.metrics()],
    }


def artifacts_dict(synthesis: SynthesisResult) -> dict[str, Any]:
    return {
        "dialect": synthesis.dialect,
        "entities": [
            {
                "entity": a.entity,
                "groups": [group_dict(g) for g in a.groups],
                "relations": [relation_dict(r) for r in a.relations],
            }
            for a in synthesis
        ],
    }


def format_artifacts(
    synthesis: SynthesisResult,
    format: Literal["text", "json"] = "text",
) -> str:
    """Format the artifact plan of a synthesized model.

    Args:
        synthesis: The synthesized artifact groups.
        format: Output format ("text" or "json").

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return json.dumps(artifacts_dict(synthesis), indent=2)

    lines: list[str] = []
    for artifacts in synthesis:
        lines.append(f"{artifacts.entity}:")
        for group in artifacts.groups:
            lines.append(f"  {group.wire.operation_type} {group.wire.signature()}")
            lines.append(f"    function: {group.function}")
            lines.append(f"    sql: {group.storage.sql}")
            hooks = group.hook_functions()
            if hooks:
                lines.append(f"    hooks: {', '.join(hooks)}")
        for resolver in artifacts.relations:
            lines.append(f"  relation {resolver.relation} -> {resolver.target}")
            lines.append(f"    function: {resolver.function}")
        lines.append("")

    lines.append(
        f"{synthesis.total_groups} artifact group(s) for "
        f"{len(synthesis.entities)} entit{'y' if len(synthesis.entities) == 1 else 'ies'}"
    )
    return "\n".join(lines)
