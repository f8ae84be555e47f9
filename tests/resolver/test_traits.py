"""Tests for trait expansion."""

from modelgen.resolver.traits import expand_model_traits, expand_traits
from modelgen.schema.loader import parse_model_from_string
from modelgen.schema.models import Entity


class TestExpandTraits:
    def test_keys_appends_id_then_name(self):
        entity = Entity(name="User", traits=["keys"])
        expand_traits(entity)

        assert [(a.name, a.type, a.modifiers) for a in entity.attributes] == [
            ("ID", "ID", ["required", "unique", "indexed"]),
            ("Name", "String", ["required", "unique", "indexed"]),
        ]

    def test_traits_append_after_declared_attributes(self):
        entity = Entity.model_validate(
            {"name": "User", "traits": ["id"], "attributes": ["Email:String"]}
        )
        expand_traits(entity)

        assert [a.name for a in entity.attributes] == ["Email", "ID"]

    def test_timestamps_are_generated(self):
        entity = Entity(name="Post", traits=["timestamps"])
        expand_traits(entity)

        assert [a.name for a in entity.attributes] == ["CreatedAt", "UpdatedAt"]
        assert all(a.type == "Time" and a.is_generated for a in entity.attributes)

    def test_authors_appends_generated_relations(self):
        entity = Entity(name="Post", traits=["authors"])
        expand_traits(entity)

        assert [(r.alias, r.entity) for r in entity.relations] == [
            ("CreatedBy", "User"),
            ("UpdatedBy", "User"),
        ]
        assert all(r.is_generated and r.has_modifier("hasOne") for r in entity.relations)

    def test_owner(self):
        entity = Entity(name="Post", traits=["owner"])
        expand_traits(entity)

        owner = entity.relations[0]
        assert owner.alias == "Owner"
        assert owner.modifiers == ["required", "hasOne"]
        assert not owner.is_generated

    def test_repeated_trait_appends_again(self):
        entity = Entity(name="User", traits=["id", "id"])
        expand_traits(entity)

        assert [a.name for a in entity.attributes] == ["ID", "ID"]

    def test_expansions_do_not_share_modifier_lists(self):
        first = Entity(name="A", traits=["id"])
        second = Entity(name="B", traits=["id"])
        expand_traits(first)
        expand_traits(second)

        first.attributes[0].modifiers.append("generated")
        assert second.attributes[0].modifiers == ["required", "unique", "indexed"]

    def test_unknown_traits_are_returned(self):
        entity = Entity(name="User", traits=["id", "softDelete"])
        unknown = expand_traits(entity)

        assert unknown == ["softDelete"]
        assert [a.name for a in entity.attributes] == ["ID"]


class TestExpandModelTraits:
    def test_unknown_trait_is_a_warning(self):
        model = parse_model_from_string(
            """
entities:
  - name: Post
    traits: [id, softDelete]
"""
        )
        result = expand_model_traits(model)

        assert result.is_valid
        assert len(result.warnings) == 1
        assert result.warnings[0].code == "UNKNOWN_TRAIT"
        assert result.warnings[0].entity == "Post"
        assert result.warnings[0].details["trait"] == "softDelete"
