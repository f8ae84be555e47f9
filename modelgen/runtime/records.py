"""Native record types for the entities of a resolved model."""

from dataclasses import field, make_dataclass
from typing import Any, Optional

from ..resolver.pipeline import ResolvedModel
from ..schema.models import Entity
from ..typemap import map_type


def record_fields(entity: Entity) -> list[tuple]:
    """Dataclass field specs: attributes, then relations.

    Every field defaults to None, so that records can be built from partial
    data; singular relations hold a record of the target entity, collections
    a list of them.
    """
    fields: list[tuple] = []
    for attr in entity.attributes:
        fields.append(
            (attr.field_name, Optional[map_type(attr.type).python], field(default=None))
        )
    for rel in entity.relations:
        if rel.is_collection:
            fields.append((rel.field_name, list, field(default_factory=list)))
        else:
            fields.append((rel.field_name, Optional[Any], field(default=None)))
    return fields


def build_record_type(entity: Entity) -> type:
    return make_dataclass(
        entity.name,
        record_fields(entity),
        namespace={"__entity__": entity.name},
    )


def build_record_types(resolved: ResolvedModel) -> dict[str, type]:
    """Build one dataclass per entity, keyed by entity name."""
    return {entity.name: build_record_type(entity) for entity in resolved.entities}
