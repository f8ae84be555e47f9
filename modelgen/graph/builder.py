"""Builder for converting a resolved model to a ModelGraph."""

from ..resolver.pipeline import ResolvedModel
from .model_graph import ModelGraph


def build_graph(resolved: ResolvedModel) -> ModelGraph:
    """Build a ModelGraph from a resolved model.

    Args:
        resolved: The resolved model.

    Returns:
        A ModelGraph representing the model.
    """
    graph = ModelGraph()

    # Add all entities first
    for entity in resolved.entities:
        graph.add_entity(
            entity.name,
            plural=entity.plural_name,
            table=entity.table_name,
        )

        for attr in entity.attributes:
            graph.add_attribute(
                entity.name,
                attr.name,
                attr_type=attr.type,
                column=attr.column_name,
                modifiers=list(attr.modifiers),
            )

    # Add relations (after all entities exist)
    for entity in resolved.entities:
        for rel in entity.relations:
            cardinality = next(
                m for m in ("hasOne", "belongsTo", "hasMany") if rel.has_modifier(m)
            )
            graph.add_relation(
                entity.name,
                rel.entity,
                rel.display_name,
                cardinality,
                column=rel.column_name,
                generated=rel.is_generated,
            )

    return graph
