"""Tests for graph builder."""

from modelgen.graph.builder import build_graph
from modelgen.resolver.pipeline import resolve_model_file


class TestBuildGraph:
    def test_entities_in_model_order(self, organizations):
        graph = build_graph(organizations)

        assert graph.get_entity_names() == ["Organization", "User"]
        assert graph.graph.nodes["entity:User"]["table"] == "users"

    def test_attributes_carry_resolved_columns(self, organizations):
        graph = build_graph(organizations)

        attrs = graph.get_attributes_for_entity("User")
        assert [(a["name"], a["column"]) for a in attrs] == [("ID", "id"), ("Name", "name")]

    def test_relations_use_display_names(self, organizations):
        graph = build_graph(organizations)

        assert list(graph.iter_relations()) == [
            ("User", "Organization", "Organization", "hasOne")
        ]

    def test_cyclic_model(self, examples_dir):
        graph = build_graph(resolve_model_file(examples_dir / "flootic.yaml"))

        relations = {(s, t, n) for s, t, n, _ in graph.iter_relations()}
        assert relations == {
            ("User", "Organization", "Organization"),
            ("Organization", "User", "Users"),
            ("Organization", "User", "CreatedBy"),
            ("Organization", "User", "UpdatedBy"),
        }
