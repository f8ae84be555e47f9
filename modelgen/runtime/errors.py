"""Runtime exceptions."""


class RepositoryError(Exception):
    """Raised when a persistence function fails."""

    def __init__(self, function: str, message: str):
        self.function = function
        super().__init__(f"Error calling function {function}: {message}")


class NotFoundError(RepositoryError):
    """Raised when a single-row finder matches no row."""

    def __init__(self, function: str, entity: str, member: str, value):
        self.entity = entity
        self.member = member
        self.value = value
        super().__init__(function, f"no {entity} with {member} = {value!r}")


class ResolverError(Exception):
    """Base class for failures of a wire operation."""

    def __init__(self, operation: str, function: str, cause: Exception):
        self.operation = operation
        self.function = function
        self.cause = cause
        super().__init__(f"{operation} failed in {function}: {cause}")


class MutationError(ResolverError):
    """Raised when a step of a mutation pipeline fails."""


class QueryError(ResolverError):
    """Raised when a query fails."""


class MissingHookError(Exception):
    """Raised when generators or hooks required by the model are not registered."""

    def __init__(self, functions: list[str]):
        self.functions = list(functions)
        super().__init__(f"Missing generator/hook function(s): {', '.join(self.functions)}")
