"""Reference and modifier integrity checks."""

from ..schema.models import (
    ATTRIBUTE_MODIFIERS,
    CARDINALITY_MODIFIERS,
    RELATION_MODIFIERS,
    Model,
)
from .base import ResolutionResult


def check_reference_integrity(model: Model) -> ResolutionResult:
    """Check entity names, relation targets and member modifiers.

    This validator checks:
    - Entity names are unique
    - Relation targets reference defined entities
    - Relations assert exactly one cardinality
    - Modifiers belong to the closed modifier sets

    Args:
        model: The trait-expanded model.

    Returns:
        ResolutionResult with errors for broken references.
    """
    result = ResolutionResult()

    seen: set[str] = set()
    for entity in model.entities:
        if entity.name in seen:
            result.add_error(
                code="DUPLICATE_ENTITY",
                message=f"Entity '{entity.name}' is declared more than once",
                entity=entity.name,
            )
        seen.add(entity.name)

    for entity in model.entities:
        attr_names: set[str] = set()
        for attr in entity.attributes:
            if attr.name in attr_names:
                result.add_error(
                    code="DUPLICATE_ATTRIBUTE",
                    message=f"Attribute '{attr.name}' is declared more than once",
                    entity=entity.name,
                    member=attr.name,
                )
            attr_names.add(attr.name)

            for modifier in attr.modifiers:
                if modifier not in ATTRIBUTE_MODIFIERS:
                    result.add_error(
                        code="INVALID_MODIFIER",
                        message=f"Attribute '{attr.name}' has unknown modifier '{modifier}'",
                        entity=entity.name,
                        member=attr.name,
                        modifier=modifier,
                    )

        for rel in entity.relations:
            name = rel.canonical_name()

            if rel.entity not in seen:
                result.add_error(
                    code="UNDEFINED_ENTITY_REF",
                    message=f"Relation '{name}' references undefined entity '{rel.entity}'",
                    entity=entity.name,
                    member=name,
                    referenced_entity=rel.entity,
                )

            for modifier in rel.modifiers:
                if modifier not in RELATION_MODIFIERS:
                    result.add_error(
                        code="INVALID_MODIFIER",
                        message=f"Relation '{name}' has unknown modifier '{modifier}'",
                        entity=entity.name,
                        member=name,
                        modifier=modifier,
                    )

            cardinalities = [m for m in CARDINALITY_MODIFIERS if rel.has_modifier(m)]
            if len(cardinalities) != 1:
                result.add_error(
                    code="INVALID_CARDINALITY",
                    message=(
                        f"Relation '{name}' must assert exactly one of "
                        f"{', '.join(CARDINALITY_MODIFIERS)}, got {len(cardinalities)}"
                    ),
                    entity=entity.name,
                    member=name,
                    cardinalities=cardinalities,
                )

    return result
