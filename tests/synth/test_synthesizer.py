"""Tests for operation-set synthesis."""

from modelgen.resolver.pipeline import resolve_model
from modelgen.schema.loader import parse_model_from_string
from modelgen.synth.models import ArtifactKind, StepKind
from modelgen.synth.synthesizer import synthesize


class TestOrganizationsScenario:
    def test_groups_in_order(self, organizations_synthesis):
        user = organizations_synthesis.for_entity("User")

        assert [g.name for g in user.groups] == [
            "createUser",
            "updateUser",
            "deleteUser",
            "findUserByID",
            "findUserByName",
            "findUsersByOrganization",
            "findAllUsers",
        ]

    def test_persistence_functions(self, organizations_synthesis):
        user = organizations_synthesis.for_entity("User")
        functions = {g.function for g in user.groups}

        assert {"insert_user", "find_user_by_id", "find_user_by_name"} <= functions
        assert functions == {
            "insert_user",
            "update_user",
            "delete_user",
            "find_user_by_id",
            "find_user_by_name",
            "find_users_by_organization",
            "find_all_users",
        }

    def test_create_mutation(self, organizations_synthesis):
        group = organizations_synthesis.get_group("createUser")

        assert group.wire.signature() == (
            "createUser(id: ID!, name: String!, organization: ID!): User!"
        )
        assert group.resolver == "createUser"
        assert group.kind == ArtifactKind.CREATE

    def test_delete_mutation(self, organizations_synthesis):
        group = organizations_synthesis.get_group("delete_organization")

        assert group.wire.signature() == "deleteOrganization(id: ID!): Organization!"

    def test_finder_queries(self, organizations_synthesis):
        by_org = organizations_synthesis.get_group("findUsersByOrganization")
        find_all = organizations_synthesis.get_group("findAllOrganizations")

        assert by_org.wire.signature() == (
            "findUsersByOrganization(organization: ID!, limit: Int!, offset: Int!): [User]"
        )
        assert find_all.wire.signature() == (
            "findAllOrganizations(limit: Int!, offset: Int!): [Organization]"
        )
        assert by_org.member == "Organization"

    def test_one_finder_and_metric_pair_per_lookup_key(self, organizations_synthesis):
        for artifacts in organizations_synthesis:
            finders = artifacts.groups_of_kind(ArtifactKind.FIND_BY_ATTRIBUTE)
            assert [g.member for g in finders] == ["ID", "Name"]

        group = organizations_synthesis.get_group("findUserByID")
        assert group.histogram.name == "find_user_by_id_latencies"
        assert group.histogram.metric_type == "histogram"
        assert group.histogram.buckets == (0, 5, 10, 50, 100, 250, 500, 1000)
        assert group.counter.name == "find_user_by_id_errors"
        assert group.counter.metric_type == "counter"

        names = [m.name for m in organizations_synthesis.metrics()]
        assert names.count("find_user_by_id_latencies") == 1
        assert names.count("find_user_by_id_errors") == 1

    def test_total_groups(self, organizations_synthesis):
        assert organizations_synthesis.total_groups == 13

    def test_dialect_is_carried(self, organizations):
        synthesis = synthesize(organizations, "postgres")

        assert synthesis.dialect == "postgres"
        assert "$1" in synthesis.get_group("insert_user").storage.sql


class TestPipelines:
    def test_create_pipeline_order(self, blog_synthesis):
        group = blog_synthesis.get_group("createPost")

        assert [(s.kind, s.function) for s in group.steps] == [
            (StepKind.GENERATOR, "generate_post_created_at_on_create"),
            (StepKind.GENERATOR, "generate_post_updated_at_on_create"),
            (StepKind.BEFORE, "before_create_post"),
            (StepKind.PERSIST, "insert_post"),
            (StepKind.AFTER, "after_create_post"),
        ]
        assert group.steps[0].member == "CreatedAt"

    def test_update_pipeline_without_hooks(self, blog_synthesis):
        group = blog_synthesis.get_group("updatePost")

        assert group.hook_functions() == [
            "generate_post_created_at_on_update",
            "generate_post_updated_at_on_update",
        ]

    def test_delete_hooks_receive_the_id(self, blog_synthesis):
        group = blog_synthesis.get_group("deletePost")

        assert [(s.kind, s.argument) for s in group.steps] == [
            (StepKind.PERSIST, "id"),
            (StepKind.AFTER, "id"),
        ]

    def test_queries_have_no_steps(self, blog_synthesis):
        assert blog_synthesis.get_group("findPostBySlug").steps == []

    def test_generated_relations_get_generators_not_arguments(self):
        resolved = resolve_model(
            parse_model_from_string(
                """
entities:
  - name: User
    traits: [id]
  - name: Doc
    traits: [id, authors]
    operations: [create]
"""
            )
        )
        group = synthesize(resolved).get_group("createDoc")

        assert [a.name for a in group.wire.arguments] == ["id"]
        assert group.hook_functions() == [
            "generate_doc_created_by_on_create",
            "generate_doc_updated_by_on_create",
        ]
        assert group.storage.params == ["id", "created_by_id", "updated_by_id"]


class TestOperationSubsets:
    def test_only_declared_operations(self):
        resolved = resolve_model(
            parse_model_from_string(
                """
entities:
  - name: Log
    traits: [id]
    attributes:
      - name: Message
        modifiers: [unique]
    operations: [create, find]
"""
            )
        )
        synthesis = synthesize(resolved)

        assert [g.name for g in synthesis.groups()] == [
            "createLog",
            "findLogByID",
            "findAllLogs",
        ]

    def test_find_all_uses_id_without_other_keys(self):
        resolved = resolve_model(
            parse_model_from_string("entities:\n  - name: Tag\n    traits: [id]\n")
        )
        group = synthesize(resolved).get_group("findAllTags")

        assert group.storage.sql == "SELECT id FROM tags ORDER BY id LIMIT ? OFFSET ?"


class TestRelationResolvers:
    def test_singular_relation_loads_by_id(self, organizations_synthesis):
        resolver = organizations_synthesis.for_entity("User").get_relation("Organization")

        assert resolver.name == "User.Organization"
        assert resolver.function == "find_organization_by_id"
        assert resolver.record_field == "organization"
        assert not resolver.many
        assert resolver.histogram.name == "resolve_user_organization_latencies"
        assert resolver.counter.name == "resolve_user_organization_errors"

    def test_has_many_pages_through_the_inverse_finder(self, blog_synthesis):
        resolver = blog_synthesis.for_entity("User").get_relation("Posts")

        assert resolver.many
        assert resolver.target == "Post"
        assert resolver.function == "find_posts_by_author"

    def test_metrics_are_declared(self, blog_synthesis):
        names = [m.name for m in blog_synthesis.metrics()]

        assert "resolve_user_posts_latencies" in names
        assert "resolve_post_author_errors" in names

    def test_target_without_finder(self):
        resolved = resolve_model(
            parse_model_from_string(
                """
entities:
  - name: Team
    traits: [keys]
    operations: [create]
  - name: Player
    traits: [keys]
    relations:
      - entity: Team
        modifiers: [belongsTo]
      - entity: Team
        alias: Teams
        modifiers: [hasMany]
"""
            )
        )
        synthesis = synthesize(resolved)

        assert synthesis.for_entity("Player").relations == []
