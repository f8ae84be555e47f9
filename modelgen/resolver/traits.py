"""Trait expansion.

Traits are syntax sugar: they inject predefined, well known attributes and
relations into an entity, so that every entity declares them the same way.
"""

from ..config.logging import get_logger
from ..schema.models import Entity, Model
from .base import ResolutionResult

logger = get_logger(__name__)

KEY_MODIFIERS = ["required", "unique", "indexed"]

# trait name -> (attributes, relations) appended in this order.
# attributes are (name, type, modifiers), relations are (alias, entity, modifiers)
TRAITS: dict[str, tuple[list[tuple], list[tuple]]] = {
    "id": (
        [("ID", "ID", KEY_MODIFIERS)],
        [],
    ),
    "keys": (
        [("ID", "ID", KEY_MODIFIERS), ("Name", "String", KEY_MODIFIERS)],
        [],
    ),
    "timestamps": (
        [
            ("CreatedAt", "Time", ["required", "generated"]),
            ("UpdatedAt", "Time", ["required", "generated"]),
        ],
        [],
    ),
    "authors": (
        [],
        [
            ("CreatedBy", "User", ["required", "hasOne", "generated"]),
            ("UpdatedBy", "User", ["required", "hasOne", "generated"]),
        ],
    ),
    "owner": (
        [],
        [("Owner", "User", ["required", "hasOne"])],
    ),
}


def expand_traits(entity: Entity) -> list[str]:
    """Append the members of every trait of the entity, in declaration order.

    Repeated traits append their members again.

    Args:
        entity: The entity to expand in place.

    Returns:
        The trait names that were not recognized.
    """
    unknown = []

    for trait in entity.traits:
        expansion = TRAITS.get(trait)
        if expansion is None:
            unknown.append(trait)
            continue

        attributes, relations = expansion
        for name, type_name, modifiers in attributes:
            entity.add_attribute(name, type_name, modifiers)
        for alias, target, modifiers in relations:
            entity.add_relation(alias, target, modifiers)

    return unknown


def expand_model_traits(model: Model) -> ResolutionResult:
    """Expand the traits of every entity in the model.

    Unknown traits expand to nothing and are reported as warnings.
    """
    result = ResolutionResult()

    for entity in model.entities:
        for trait in expand_traits(entity):
            logger.warning("Ignoring unknown trait '%s' on entity '%s'", trait, entity.name)
            result.add_warning(
                code="UNKNOWN_TRAIT",
                message=f"Unknown trait '{trait}' was ignored",
                entity=entity.name,
                trait=trait,
            )

    return result
