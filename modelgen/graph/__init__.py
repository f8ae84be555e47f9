"""Graph layer for representing resolved models as networkx graphs."""

from .node_types import NodeType, EdgeType
from .model_graph import ModelGraph
from .builder import build_graph

__all__ = [
    "NodeType",
    "EdgeType",
    "ModelGraph",
    "build_graph",
]
