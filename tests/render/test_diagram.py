"""Tests for diagram rendering."""

from modelgen.graph.builder import build_graph
from modelgen.render.diagram import render_diagram


class TestRenderDiagram:
    def test_digraph(self, organizations):
        dot = render_diagram(build_graph(organizations))

        assert dot.startswith("digraph G {\n")
        assert dot.endswith("}\n")

    def test_nodes(self, organizations):
        dot = render_diagram(build_graph(organizations))

        assert '    organization [shape=box,label="Organization"];' in dot
        assert '    user_name [shape=ellipse,label="Name"];' in dot
        assert 'label="ID"' not in dot

    def test_links(self, organizations):
        dot = render_diagram(build_graph(organizations))

        assert '    user -> user_name [style=dotted,label=""];' in dot
        assert '    user -> organization [style=bold,label="Organization"];' in dot

    def test_collections_are_dashed(self, blog):
        dot = render_diagram(build_graph(blog))

        assert '    user -> post [style=dashed,label="Posts"];' in dot
        assert '    post -> user [style=bold,label="Author"];' in dot
