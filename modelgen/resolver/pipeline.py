"""Resolution pipeline that runs every pass over a model."""

from dataclasses import dataclass, field
from pathlib import Path

from ..config.logging import get_logger
from ..schema.errors import ModelError
from ..schema.loader import parse_model
from ..schema.models import Entity, Model, UDType
from .base import ResolutionResult
from .naming import resolve_names
from .operations import resolve_model_operations
from .references import check_reference_integrity
from .traits import expand_model_traits
from .types import resolve_types

logger = get_logger(__name__)


@dataclass
class ResolvedModel:
    """A fully resolved model, indexed by entity name.

    Renderers and the runtime only ever see resolved models.
    """

    model: Model
    result: ResolutionResult = field(default_factory=ResolutionResult)

    def __post_init__(self):
        self._index = {e.name: e for e in self.model.entities}

    @property
    def entities(self) -> list[Entity]:
        return self.model.entities

    @property
    def types(self) -> list[UDType]:
        return self.model.types

    def get_entity(self, name: str) -> Entity:
        """Get an entity by name.

        Raises:
            KeyError: If no such entity exists.
        """
        return self._index[name]


def run_passes(model: Model) -> ResolutionResult:
    """Run every resolution pass over the model, in place.

    Each pass runs even when an earlier one found errors, so that all
    configuration problems are reported together.

    Args:
        model: The parsed model, mutated in place.

    Returns:
        Combined ResolutionResult from all passes.
    """
    result = ResolutionResult()

    passes = [
        ("traits", expand_model_traits),
        ("types", resolve_types),
        ("operations", resolve_model_operations),
        ("references", check_reference_integrity),
        ("names", resolve_names),
    ]
    for name, run in passes:
        pass_result = run(model)
        logger.debug(
            "Resolution pass '%s': %d error(s), %d warning(s)",
            name,
            len(pass_result.errors),
            len(pass_result.warnings),
        )
        result.merge(pass_result)

    return result


def resolve_model(model: Model) -> ResolvedModel:
    """Resolve a parsed model.

    Raises:
        ModelError: With every collected issue, if any pass found an error.
    """
    result = run_passes(model)

    if result.has_errors:
        for issue in result.errors:
            logger.error("%s", issue)
        raise ModelError(
            f"Model resolution failed with {len(result.errors)} error(s)",
            result.issues,
        )

    return ResolvedModel(model=model, result=result)


def resolve_model_file(path: str | Path) -> ResolvedModel:
    """Load and resolve a model document.

    Raises:
        SchemaLoadError: If the file cannot be loaded.
        SchemaValidationError: If the document fails schema validation.
        ModelError: If the model cannot be resolved.
    """
    return resolve_model(parse_model(path))
