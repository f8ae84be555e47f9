"""Canonical naming for entities, attributes and relations.

Every renderer reuses the names computed here verbatim, which keeps the
storage schema, the wire schema and the runtime in lock-step.
"""

import re

from ..schema.models import Attribute, Entity, Model, Relation
from .base import ResolutionResult

RELATION_VAR_SUFFIX = "Rel"


def snake_case(s: str) -> str:
    """Convert CamelCase, spaced or dashed names to snake_case."""
    s = re.sub(r"[\s\-]+", "_", s.strip())
    s = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", s)
    s = re.sub(r"([a-z\d])([A-Z])", r"\1_\2", s)
    return s.lower()


def lower_camel(s: str) -> str:
    """Convert a name to lowerCamelCase (``CreatedAt`` -> ``createdAt``)."""
    words = [w for w in snake_case(s).split("_") if w]
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def resolve_entity_names(entity: Entity) -> None:
    """Fill in the variable, plural and table names of an entity."""
    entity.variable_name = entity.variable or entity.name.lower()
    entity.plural_name = entity.plural or f"{entity.name}s"
    entity.table_name = snake_case(entity.plural_name)


def resolve_attribute_names(attr: Attribute) -> None:
    attr.variable_name = attr.name.lower()
    attr.field_name = snake_case(attr.name)
    if attr.is_id:
        attr.column_name = "id"
        attr.wire_name = "id"
    else:
        attr.column_name = snake_case(attr.name)
        attr.wire_name = lower_camel(attr.name)


def relation_display_name(rel: Relation, target: Entity | None) -> str:
    """Alias if present, else the target's plural (hasMany) or singular name."""
    if rel.alias:
        return rel.alias
    if target is None:
        return rel.entity
    if rel.is_collection:
        return target.plural_name or f"{target.name}s"
    return target.name


def resolve_relation_names(
    rel: Relation, target: Entity | None, taken_variables: set[str]
) -> None:
    """Fill in the names of a relation.

    Args:
        rel: The relation to name.
        target: The target entity, already named, if it exists.
        taken_variables: Variable names of the owning entity's attributes.
    """
    rel.display_name = relation_display_name(rel, target)
    rel.field_name = snake_case(rel.display_name)
    rel.wire_name = lower_camel(rel.display_name)
    rel.column_name = f"{snake_case(rel.display_name)}_id" if rel.is_singular else None

    variable = rel.display_name.lower()
    if variable in taken_variables:
        variable = f"{variable}{RELATION_VAR_SUFFIX}"
    rel.variable_name = variable


def resolve_names(model: Model) -> ResolutionResult:
    """Resolve every name in the model and detect collisions.

    Entity names are resolved first, for every entity, because relation
    names depend on the resolved plural of their target.
    """
    result = ResolutionResult()

    for entity in model.entities:
        resolve_entity_names(entity)

    index = {e.name: e for e in model.entities}

    for entity in model.entities:
        for attr in entity.attributes:
            resolve_attribute_names(attr)

        taken = {a.variable_name for a in entity.attributes}
        for rel in entity.relations:
            resolve_relation_names(rel, index.get(rel.entity), taken)

        result.merge(_check_collisions(entity))

        if entity.id_attribute is None and any(
            entity.supports_operation(op) for op in ("update", "delete", "find")
        ):
            result.add_warning(
                code="MISSING_ID",
                message=(
                    f"Entity '{entity.name}' has no ID attribute; "
                    "lookups by id will not match any row"
                ),
                entity=entity.name,
            )

    return result


def _check_collisions(entity: Entity) -> ResolutionResult:
    result = ResolutionResult()

    relations_by_name: dict[str, Relation] = {}
    for rel in entity.relations:
        other = relations_by_name.get(rel.display_name)
        if other is not None:
            result.add_error(
                code="RELATION_NAME_COLLISION",
                message=(
                    f"Relations to '{other.entity}' and '{rel.entity}' both resolve "
                    f"to the name '{rel.display_name}'; add an alias to one of them"
                ),
                entity=entity.name,
                member=rel.display_name,
            )
            continue
        relations_by_name[rel.display_name] = rel

    attr_fields = {a.field_name: a for a in entity.attributes}
    attr_columns = {a.column_name: a for a in entity.attributes}
    for rel in relations_by_name.values():
        attr = attr_fields.get(rel.field_name)
        if attr is not None:
            result.add_error(
                code="MEMBER_NAME_COLLISION",
                message=f"Relation '{rel.display_name}' clashes with attribute '{attr.name}'",
                entity=entity.name,
                member=rel.display_name,
            )
            continue

        attr = attr_columns.get(rel.column_name) if rel.column_name else None
        if attr is not None:
            result.add_error(
                code="MEMBER_NAME_COLLISION",
                message=(
                    f"Relation '{rel.display_name}' and attribute '{attr.name}' "
                    f"both map to column '{rel.column_name}'"
                ),
                entity=entity.name,
                member=rel.display_name,
            )

    return result
