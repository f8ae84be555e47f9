"""Graphviz rendering of the model graph."""

from ..graph.model_graph import ModelGraph
from ..resolver.naming import snake_case


def _node(name: str, label: str, shape: str) -> str:
    return f'    {name} [shape={shape},label="{label}"];'


def _link(source: str, target: str, style: str, label: str = "") -> str:
    return f'    {source} -> {target} [style={style},label="{label}"];'


def render_diagram(graph: ModelGraph) -> str:
    """Render a model graph as a dot digraph.

    Entities are boxes, attributes are ellipses linked by dotted edges, and
    relations are bold edges labelled with their display name. ID attributes
    are left out.
    """
    nodes: list[str] = []
    links: list[str] = []

    for entity_name in graph.get_entity_names():
        entity_node = snake_case(entity_name)
        nodes.append(_node(entity_node, entity_name, "box"))

        for attr in graph.get_attributes_for_entity(entity_name):
            if attr["name"] == "ID":
                continue
            attr_node = f"{entity_node}_{snake_case(attr['name'])}"
            nodes.append(_node(attr_node, attr["name"], "ellipse"))
            links.append(_link(entity_node, attr_node, "dotted"))

    for source, target, name, cardinality in graph.iter_relations():
        style = "bold" if cardinality != "hasMany" else "dashed"
        links.append(_link(snake_case(source), snake_case(target), style, name))

    return "\n".join(["digraph G {", *nodes, *links, "}"]) + "\n"
