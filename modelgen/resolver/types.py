"""User defined type resolution."""

from ..schema.errors import NestedUnionError
from ..schema.models import BUILTIN_TYPES, Model, UDType
from .base import ResolutionResult


def flatten_union(udtype: UDType, declared: dict[str, UDType]) -> None:
    """Replace references to other types by their values, in place.

    Values that do not name another type are kept verbatim. The type becomes
    an enum once a reference was substituted; a union of literals stays a
    union.

    Args:
        udtype: The union to flatten.
        declared: Every declared type, by name, with its declared kind.

    Raises:
        NestedUnionError: If the union references another union.
    """
    values: list[str] = []
    substituted = False
    for value in udtype.values:
        referenced = declared.get(value)
        if referenced is None:
            values.append(value)
            continue
        if referenced.kind == "union":
            raise NestedUnionError(udtype.name, referenced.name)
        values.extend(referenced.values)
        substituted = True

    udtype.values = values
    if substituted:
        udtype.kind = "enum"


def resolve_types(model: Model) -> ResolutionResult:
    """Flatten unions of user defined types, and check attribute types.

    Unions may only reference types that are already literal enums; a union
    referencing a union is reported as an error and left untouched.
    """
    result = ResolutionResult()

    # Flattening turns unions into enums as we go, so references are looked
    # up in a snapshot holding the declared kinds
    declared = {t.name: t.model_copy(deep=True) for t in model.types}

    for udtype in model.types:
        if udtype.kind != "union":
            continue
        try:
            flatten_union(udtype, declared)
        except NestedUnionError as e:
            result.add_error(
                code="NESTED_UNION",
                message=str(e),
                entity=udtype.name,
                referenced_type=e.referenced,
            )

    known = set(BUILTIN_TYPES) | set(declared)
    for entity in model.entities:
        for attr in entity.attributes:
            if attr.type not in known:
                result.add_error(
                    code="UNKNOWN_TYPE",
                    message=f"Attribute '{attr.name}' has unknown type '{attr.type}'",
                    entity=entity.name,
                    member=attr.name,
                    type=attr.type,
                )

    return result
