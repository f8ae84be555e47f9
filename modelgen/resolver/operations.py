"""Operation resolution and hook validation."""

from ..schema.errors import InvalidOperationError
from ..schema.models import LIFECYCLES, OPERATIONS, Entity, Model
from .base import ResolutionResult

DEFAULT_OPERATIONS = list(OPERATIONS)


def resolve_operations(entity: Entity) -> list[str]:
    """Default or validate the operations supported by an entity.

    An entity declaring no operations supports all of them.

    Raises:
        InvalidOperationError: On the first unsupported operation name.
    """
    if not entity.operations:
        entity.operations = list(DEFAULT_OPERATIONS)
        return entity.operations

    for operation in entity.operations:
        if operation not in OPERATIONS:
            raise InvalidOperationError(entity.name, operation)

    return entity.operations


def resolve_model_operations(model: Model) -> ResolutionResult:
    """Resolve operations and check hooks for every entity in the model."""
    result = ResolutionResult()

    for entity in model.entities:
        try:
            resolve_operations(entity)
        except InvalidOperationError as e:
            result.add_error(
                code="INVALID_OPERATION",
                message=str(e),
                entity=entity.name,
                operation=e.operation,
            )
            continue

        for operation, lifecycles in entity.hooks.items():
            if operation not in OPERATIONS:
                result.add_error(
                    code="INVALID_HOOK",
                    message=f"Hook declared on unknown operation '{operation}'",
                    entity=entity.name,
                    operation=operation,
                )
                continue

            for lifecycle in lifecycles:
                if lifecycle not in LIFECYCLES:
                    result.add_error(
                        code="INVALID_HOOK",
                        message=(
                            f"Hook lifecycle '{lifecycle}' on operation '{operation}' "
                            f"must be one of {', '.join(LIFECYCLES)}"
                        ),
                        entity=entity.name,
                        operation=operation,
                        lifecycle=lifecycle,
                    )

            if lifecycles and not entity.supports_operation(operation):
                result.add_warning(
                    code="UNUSED_HOOK",
                    message=f"Hooks on '{operation}' are never called: the operation is not supported",
                    entity=entity.name,
                    operation=operation,
                )

    return result
