"""ModelGraph wrapper around networkx for resolved models."""

from typing import Any, Iterator

import networkx as nx

from .node_types import RELATION_EDGE_TYPES, EdgeType, NodeType


class ModelGraph:
    """A graph representation of a resolved model.

    Wraps a networkx MultiDiGraph: an entity may hold several relations to
    the same target (CreatedBy and UpdatedBy both point at User), and the
    relation graph may contain cycles.
    """

    def __init__(self):
        """Initialize an empty model graph."""
        self._graph = nx.MultiDiGraph()

    @property
    def graph(self) -> nx.MultiDiGraph:
        """Get the underlying networkx graph."""
        return self._graph

    # -------------------------------------------------------------------------
    # Node management
    # -------------------------------------------------------------------------

    def add_entity(self, name: str, **attrs: Any) -> str:
        """Add an entity node to the graph.

        Args:
            name: The entity name.
            **attrs: Additional attributes for the node.

        Returns:
            The node ID.
        """
        node_id = f"entity:{name}"
        self._graph.add_node(
            node_id,
            node_type=NodeType.ENTITY,
            name=name,
            **attrs,
        )
        return node_id

    def add_attribute(self, entity_name: str, attr_name: str, **attrs: Any) -> str:
        """Add an attribute node, linked from its entity.

        Args:
            entity_name: The owning entity name.
            attr_name: The attribute name.
            **attrs: Additional attributes (type, column, modifiers...).

        Returns:
            The node ID.
        """
        node_id = f"attr:{entity_name}.{attr_name}"
        self._graph.add_node(
            node_id,
            node_type=NodeType.ATTRIBUTE,
            entity=entity_name,
            name=attr_name,
            **attrs,
        )

        entity_id = f"entity:{entity_name}"
        if self._graph.has_node(entity_id):
            self._graph.add_edge(entity_id, node_id, edge_type=EdgeType.HAS_ATTRIBUTE)

        return node_id

    def add_relation(
        self,
        from_entity: str,
        to_entity: str,
        name: str,
        cardinality: str,
        **attrs: Any,
    ) -> None:
        """Add a relation edge between entities, keyed by its display name.

        Args:
            from_entity: The owning entity name.
            to_entity: The target entity name.
            name: The relation display name.
            cardinality: hasOne, belongsTo or hasMany.
            **attrs: Additional edge attributes.
        """
        self._graph.add_edge(
            f"entity:{from_entity}",
            f"entity:{to_entity}",
            key=name,
            edge_type=EdgeType(cardinality),
            name=name,
            **attrs,
        )

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_entity_names(self) -> list[str]:
        """Get all entity names in the graph, in insertion order."""
        return [
            data["name"]
            for _, data in self._graph.nodes(data=True)
            if data.get("node_type") == NodeType.ENTITY
        ]

    def get_attributes_for_entity(self, entity_name: str) -> list[dict[str, Any]]:
        """Get all attribute nodes of an entity, in insertion order."""
        entity_id = f"entity:{entity_name}"
        if not self._graph.has_node(entity_id):
            return []

        return [
            dict(self._graph.nodes[target])
            for _, target, data in self._graph.out_edges(entity_id, data=True)
            if data.get("edge_type") == EdgeType.HAS_ATTRIBUTE
        ]

    def iter_relations(self) -> Iterator[tuple[str, str, str, str]]:
        """Iterate over all entity relations.

        Yields:
            Tuples of (from_entity, to_entity, relation_name, cardinality).
        """
        for source, target, data in self._graph.edges(data=True):
            edge_type = data.get("edge_type")
            if edge_type in RELATION_EDGE_TYPES:
                yield (
                    source.replace("entity:", ""),
                    target.replace("entity:", ""),
                    data["name"],
                    edge_type.value,
                )
