"""Wire schema (GraphQL SDL) rendering."""

from ..resolver.pipeline import ResolvedModel
from ..schema.models import Attribute, Relation, UDType
from ..synth.models import SynthesisResult
from ..typemap import map_type

OPERATION_TYPES = (("query", "Query"), ("mutation", "Mutation"))


def attribute_field(attr: Attribute) -> str:
    wire_type = map_type(attr.type).wire
    if attr.is_id or attr.is_required:
        wire_type = f"{wire_type}!"
    return f"{attr.wire_name}: {wire_type}"


def relation_field(rel: Relation) -> str:
    if rel.is_collection:
        return f"{rel.wire_name}: [{rel.entity}!]!"
    if rel.is_required:
        return f"{rel.wire_name}: {rel.entity}!"
    return f"{rel.wire_name}: {rel.entity}"


def render_enum(udtype: UDType) -> str:
    lines = [f"enum {udtype.name} {{"]
    lines.extend(f"  {value}" for value in udtype.values)
    lines.append("}")
    return "\n".join(lines)


def render_union(udtype: UDType) -> str:
    return f"union {udtype.name} = {' | '.join(udtype.values)}"


def render_schema(operation_types: list[str]) -> str:
    """The schema block, declaring only the root types that are rendered."""
    lines = ["schema {"]
    lines.extend(
        f"  {op}: {name}" for op, name in OPERATION_TYPES if op in operation_types
    )
    lines.append("}")
    return "\n".join(lines)


def render_operations(name: str, operations: list) -> str:
    lines = [f"type {name} {{"]
    lines.extend(f"  {op.signature()}" for op in operations)
    lines.append("}")
    return "\n".join(lines)


def render_sdl(resolved: ResolvedModel, synthesis: SynthesisResult) -> str:
    """Render the wire schema of a resolved model.

    Type declarations follow model order; Mutation and Query fields follow
    the order of the synthesized artifact groups.

    Args:
        resolved: The resolved model.
        synthesis: The artifact groups synthesized from the same model.

    Returns:
        The schema document.
    """
    blocks = []

    for udtype in resolved.types:
        if not udtype.values:
            continue
        if udtype.kind == "union":
            blocks.append(render_union(udtype))
        else:
            blocks.append(render_enum(udtype))

    for entity in resolved.entities:
        lines = [f"type {entity.name} {{"]
        lines.extend(f"  {attribute_field(a)}" for a in entity.attributes)
        lines.extend(f"  {relation_field(r)}" for r in entity.relations)
        lines.append("}")
        blocks.append("\n".join(lines))

    mutations = [g.wire for g in synthesis.groups() if g.wire.operation_type == "mutation"]
    queries = [g.wire for g in synthesis.groups() if g.wire.operation_type == "query"]

    if mutations:
        blocks.append(render_operations("Mutation", mutations))
    if queries:
        blocks.append(render_operations("Query", queries))

    # Root types without fields are not valid SDL
    rendered = [op for op, ops in (("query", queries), ("mutation", mutations)) if ops]
    if rendered:
        blocks.insert(0, render_schema(rendered))

    return "\n\n".join(blocks) + "\n"
