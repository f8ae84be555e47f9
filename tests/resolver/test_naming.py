"""Tests for naming resolution."""

import pytest

from modelgen.resolver.naming import (
    lower_camel,
    relation_display_name,
    resolve_names,
    snake_case,
)
from modelgen.resolver.operations import resolve_model_operations
from modelgen.resolver.traits import expand_model_traits
from modelgen.schema.loader import parse_model, parse_model_from_string


def _named(yaml: str):
    model = parse_model_from_string(yaml)
    expand_model_traits(model)
    resolve_model_operations(model)
    result = resolve_names(model)
    return model, result


class TestCaseConversions:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("CreatedAt", "created_at"),
            ("ID", "id"),
            ("UserID", "user_id"),
            ("findUserByIDLatencies", "find_user_by_id_latencies"),
            ("Organizations", "organizations"),
            ("login count", "login_count"),
        ],
    )
    def test_snake_case(self, name, expected):
        assert snake_case(name) == expected

    def test_lower_camel(self):
        assert lower_camel("CreatedAt") == "createdAt"
        assert lower_camel("Organization") == "organization"
        assert lower_camel("created_by") == "createdBy"


class TestEntityNames:
    def test_defaults(self):
        model, _ = _named("entities:\n  - name: BlogPost\n")
        post = model.get_entity("BlogPost")

        assert post.variable_name == "blogpost"
        assert post.plural_name == "BlogPosts"
        assert post.table_name == "blog_posts"

    def test_declared_plural_and_variable(self):
        model, _ = _named(
            "entities:\n  - name: Person\n    plural: People\n    variable: who\n"
        )
        person = model.get_entity("Person")

        assert person.plural_name == "People"
        assert person.variable_name == "who"
        assert person.table_name == "people"


class TestAttributeNames:
    def test_id_is_primary_key_column(self):
        model, _ = _named("entities:\n  - name: User\n    traits: [id]\n")
        attr = model.get_entity("User").attributes[0]

        assert attr.column_name == "id"
        assert attr.wire_name == "id"
        assert attr.field_name == "id"
        assert attr.variable_name == "id"

    def test_multi_word_attribute(self):
        model, _ = _named("entities:\n  - name: User\n    attributes: ['LoginCount:Int']\n")
        attr = model.get_entity("User").attributes[0]

        assert attr.column_name == "login_count"
        assert attr.wire_name == "loginCount"
        assert attr.field_name == "login_count"
        assert attr.variable_name == "logincount"


class TestRelationNames:
    def test_has_many_uses_target_plural(self):
        model, _ = _named(
            """
entities:
  - name: User
    relations:
      - hasMany: Organization
  - name: Organization
"""
        )
        rel = model.get_entity("User").relations[0]

        assert rel.display_name == "Organizations"
        assert rel.column_name is None
        assert rel.wire_name == "organizations"

    def test_has_many_uses_declared_plural_of_later_entity(self):
        model, _ = _named(
            """
entities:
  - name: Team
    relations:
      - hasMany: Person
  - name: Person
    plural: People
"""
        )
        assert model.get_entity("Team").relations[0].display_name == "People"

    def test_aliased_has_one(self):
        model, _ = _named(
            """
entities:
  - name: User
  - name: Organization
    relations:
      - alias: Owner
        entity: User
        modifiers: [hasOne]
"""
        )
        rel = model.get_entity("Organization").relations[0]

        assert rel.display_name == "Owner"
        assert rel.column_name == "owner_id"
        assert rel.field_name == "owner"

    def test_authors_trait_columns(self):
        model, _ = _named(
            """
entities:
  - name: User
  - name: Post
    traits: [authors]
"""
        )
        post = model.get_entity("Post")

        assert [r.column_name for r in post.relations] == ["created_by_id", "updated_by_id"]
        assert [r.wire_name for r in post.relations] == ["createdBy", "updatedBy"]

    def test_variable_suffixed_only_on_clash(self):
        model, _ = _named(
            """
entities:
  - name: Owner
  - name: Pet
    attributes: ["OwnerName:String", "Owner2:String"]
    relations:
      - belongsTo: Owner
"""
        )
        assert model.get_entity("Pet").relations[0].variable_name == "owner"

    def test_variable_suffix_on_clash(self):
        entity_yaml = """
entities:
  - name: Owner
  - name: Pet
    attributes:
      - name: OwNer
    relations:
      - belongsTo: Owner
"""
        model, _ = _named(entity_yaml)
        assert model.get_entity("Pet").relations[0].variable_name == "ownerRel"

    def test_display_name_of_unknown_target(self):
        model = parse_model_from_string(
            "entities:\n  - name: Post\n    relations:\n      - belongsTo: Ghost\n"
        )
        rel = model.get_entity("Post").relations[0]

        assert relation_display_name(rel, None) == "Ghost"


class TestCollisions:
    def test_relation_name_collision(self, examples_dir):
        model = parse_model(examples_dir / "invalid" / "relation_collision.yaml")
        expand_model_traits(model)

        result = resolve_names(model)

        errors = [e for e in result.errors if e.code == "RELATION_NAME_COLLISION"]
        assert len(errors) == 1
        assert errors[0].entity == "Post"
        assert errors[0].member == "User"

    def test_aliases_resolve_collision(self):
        _, result = _named(
            """
entities:
  - name: User
    traits: [id]
  - name: Post
    traits: [id, authors]
"""
        )
        assert result.is_valid

    def test_member_name_collision(self):
        _, result = _named(
            """
entities:
  - name: User
    traits: [id]
  - name: Post
    traits: [id]
    attributes: ["User:String"]
    relations:
      - belongsTo: User
"""
        )
        assert [e.code for e in result.errors] == ["MEMBER_NAME_COLLISION"]

    def test_column_collision(self):
        _, result = _named(
            """
entities:
  - name: User
    traits: [id]
  - name: Post
    traits: [id]
    attributes: ["UserID:String"]
    relations:
      - belongsTo: User
"""
        )
        assert [e.code for e in result.errors] == ["MEMBER_NAME_COLLISION"]
        assert "user_id" in result.errors[0].message

    def test_missing_id_is_a_warning(self):
        _, result = _named("entities:\n  - name: Note\n    attributes: ['Body:String']\n")

        assert result.is_valid
        assert [w.code for w in result.warnings] == ["MISSING_ID"]

    def test_no_missing_id_warning_for_create_only(self):
        _, result = _named(
            "entities:\n  - name: Event\n    operations: [create]\n"
        )
        assert not result.has_warnings
