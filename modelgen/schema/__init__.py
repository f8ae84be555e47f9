"""Schema layer: the model IR and its source loader."""

from .errors import (
    InvalidOperationError,
    ModelError,
    NestedUnionError,
    SchemaLoadError,
    SchemaValidationError,
)
from .models import (
    Attribute,
    Entity,
    Member,
    Model,
    Relation,
    UDType,
)
from .loader import load_document, parse_model, parse_model_data, parse_model_from_string

__all__ = [
    "InvalidOperationError",
    "ModelError",
    "NestedUnionError",
    "SchemaLoadError",
    "SchemaValidationError",
    "Attribute",
    "Entity",
    "Member",
    "Model",
    "Relation",
    "UDType",
    "load_document",
    "parse_model",
    "parse_model_data",
    "parse_model_from_string",
]
