"""Tests for wire schema rendering."""

from modelgen.render.sdl import render_sdl
from modelgen.resolver.pipeline import resolve_model_file
from modelgen.synth.synthesizer import synthesize


class TestRenderSdl:
    def test_schema_block_first(self, organizations, organizations_synthesis):
        sdl = render_sdl(organizations, organizations_synthesis)

        assert sdl.startswith("schema {\n  query: Query\n  mutation: Mutation\n}\n")

    def test_object_types(self, organizations, organizations_synthesis):
        sdl = render_sdl(organizations, organizations_synthesis)

        assert "type User {\n  id: ID!\n  name: String!\n  organization: Organization\n}" in sdl

    def test_mutations_and_queries(self, organizations, organizations_synthesis):
        sdl = render_sdl(organizations, organizations_synthesis)

        assert "  createUser(id: ID!, name: String!, organization: ID!): User!\n" in sdl
        assert "  deleteUser(id: ID!): User!\n" in sdl
        assert "  findUserByName(name: String!): User!\n" in sdl
        assert "  findAllUsers(limit: Int!, offset: Int!): [User]\n" in sdl
        assert sdl.index("type Mutation {") < sdl.index("type Query {")

    def test_enums_and_collections(self, blog, blog_synthesis):
        sdl = render_sdl(blog, blog_synthesis)

        assert "enum Visibility {\n  Public\n  Private\n}" in sdl
        assert "  posts: [Post!]!\n" in sdl
        assert "  author: User!\n" in sdl
        assert "  visibility: Visibility\n" in sdl

    def test_flattened_unions_render_as_enums(self, examples_dir):
        resolved = resolve_model_file(examples_dir / "flootic.yaml")
        sdl = render_sdl(resolved, synthesize(resolved))

        assert "enum Principal {\n  Admin\n  Member\n  Active\n  Suspended\n  Guest\n}" in sdl
        assert "union " not in sdl

    def test_no_mutation_type_without_mutations(self):
        from modelgen.resolver.pipeline import resolve_model
        from modelgen.schema.loader import parse_model_from_string

        resolved = resolve_model(
            parse_model_from_string(
                "entities:\n  - name: Tag\n    traits: [id]\n    operations: [find]\n"
            )
        )
        sdl = render_sdl(resolved, synthesize(resolved))

        assert "type Mutation" not in sdl
        assert "findTagByID(id: ID!): Tag!" in sdl
        assert "schema {\n  query: Query\n}\n" in sdl
        assert "mutation: Mutation" not in sdl

    def test_no_query_type_without_queries(self):
        from modelgen.resolver.pipeline import resolve_model
        from modelgen.schema.loader import parse_model_from_string

        resolved = resolve_model(
            parse_model_from_string(
                "entities:\n  - name: Event\n    traits: [id]\n    operations: [create]\n"
            )
        )
        sdl = render_sdl(resolved, synthesize(resolved))

        assert sdl.startswith("schema {\n  mutation: Mutation\n}\n")
        assert "type Query" not in sdl
        assert "query: Query" not in sdl

    def test_union_of_entities(self):
        from modelgen.resolver.pipeline import resolve_model
        from modelgen.schema.loader import parse_model_from_string

        resolved = resolve_model(
            parse_model_from_string(
                """
types:
  - name: SearchResult
    type: union
    values: [User, Organization]
entities:
  - name: Organization
    traits: [keys]
  - name: User
    traits: [keys]
"""
            )
        )
        sdl = render_sdl(resolved, synthesize(resolved))

        assert "union SearchResult = User | Organization\n" in sdl
        assert "enum SearchResult" not in sdl
