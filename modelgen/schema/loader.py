"""YAML/JSON loading and parsing for model documents."""

import json
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..config.logging import get_logger
from .errors import SchemaLoadError, SchemaValidationError
from .models import Model

logger = get_logger(__name__)


def load_document(path: str | Path) -> dict:
    """Load a model document and return the raw data.

    Files ending in ``.json`` are parsed as JSON, everything else as YAML.

    Args:
        path: Path to the model document.

    Returns:
        The parsed document as a dictionary.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
    """
    path = Path(path)

    if not path.exists():
        raise SchemaLoadError(f"File not found: {path}", str(path))

    if not path.is_file():
        raise SchemaLoadError(f"Not a file: {path}", str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"Invalid JSON: {e}", str(path)) from e
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}", str(path)) from e
    except OSError as e:
        raise SchemaLoadError(f"Cannot read file: {e}", str(path)) from e

    logger.debug("Loaded model document %s", path)
    return _check_root(data, str(path))


def parse_model(path: str | Path) -> Model:
    """Load and parse a model document into a Model.

    Args:
        path: Path to the YAML or JSON document.

    Returns:
        The parsed, unresolved Model.

    Raises:
        SchemaLoadError: If the file cannot be read or parsed.
        SchemaValidationError: If the data fails validation.
    """
    data = load_document(path)
    return parse_model_data(data)


def parse_model_from_string(source: str) -> Model:
    """Parse a YAML (or JSON, which is valid YAML) string into a Model.

    Raises:
        SchemaLoadError: If the string cannot be parsed.
        SchemaValidationError: If the data fails validation.
    """
    try:
        data = yaml.safe_load(source)
    except yaml.YAMLError as e:
        raise SchemaLoadError(f"Invalid YAML: {e}") from e

    return parse_model_data(_check_root(data))


def parse_model_data(data: dict) -> Model:
    """Validate raw document data into a Model.

    Raises:
        SchemaValidationError: If the data fails validation.
    """
    try:
        return Model.model_validate(data)
    except ValidationError as e:
        errors = [
            {
                "loc": ".".join(str(x) for x in err["loc"]),
                "msg": err["msg"],
                "type": err["type"],
            }
            for err in e.errors()
        ]
        raise SchemaValidationError(
            f"Schema validation failed with {len(errors)} error(s)", errors
        ) from e


def _check_root(data, path: str | None = None) -> dict:
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise SchemaLoadError(
            f"Expected a mapping at root, got {type(data).__name__}", path
        )

    return data
