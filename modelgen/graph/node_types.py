"""Node and edge type definitions for the model graph."""

from enum import Enum


class NodeType(str, Enum):
    """Types of nodes in the model graph."""

    ENTITY = "entity"
    ATTRIBUTE = "attribute"


class EdgeType(str, Enum):
    """Types of edges in the model graph."""

    # Entity relations
    BELONGS_TO = "belongsTo"
    HAS_MANY = "hasMany"
    HAS_ONE = "hasOne"

    # Structure edges
    HAS_ATTRIBUTE = "has_attribute"  # Entity -> Attribute


RELATION_EDGE_TYPES = {EdgeType.BELONGS_TO, EdgeType.HAS_MANY, EdgeType.HAS_ONE}
