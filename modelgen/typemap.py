"""Mapping of abstract field types to every target representation.

This table is the only place where types are mapped; renderers and the
runtime must never special-case a type on their own.
"""

from dataclasses import dataclass
from functools import lru_cache


@dataclass(frozen=True)
class TypeMapping:
    """Representations of one abstract type in each target."""

    native: str
    storage: str
    wire: str
    python: type


_STRING = TypeMapping(native="string", storage="varchar", wire="String", python=str)

TYPE_TABLE: dict[str, TypeMapping] = {
    "ID": TypeMapping(native="string", storage="varchar", wire="ID", python=str),
    "Int": TypeMapping(native="int32", storage="integer", wire="Int", python=int),
    "Float": TypeMapping(native="float64", storage="real", wire="Float", python=float),
    "Boolean": TypeMapping(native="bool", storage="boolean", wire="Boolean", python=bool),
    "String": _STRING,
    "Time": _STRING,
}


@lru_cache(maxsize=None)
def map_type(abstract_type: str) -> TypeMapping:
    """Map an abstract type to its native, storage, wire and Python types.

    Types outside the table (enum and union names) are string-like everywhere
    except on the wire, where they keep their own name.
    """
    mapping = TYPE_TABLE.get(abstract_type)
    if mapping is not None:
        return mapping
    return TypeMapping(native="string", storage="varchar", wire=abstract_type, python=str)


# Foreign keys always reference an ID
FOREIGN_KEY = TYPE_TABLE["ID"]
