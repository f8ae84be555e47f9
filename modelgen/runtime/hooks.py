"""Registry of user supplied generators and lifecycle hooks."""

from typing import Callable

from ..synth.models import SynthesisResult
from .errors import MissingHookError


class HookRegistry:
    """Generators and hooks, by their synthesized function name.

    Functions are registered directly or with the decorator form::

        hooks = HookRegistry()

        @hooks.register("generate_user_created_at_on_create")
        def now(repo, record):
            return "2024-01-01T00:00:00Z"

    Every function receives the storage handle (the Repository, whose
    persistence functions and connection it may use) before the record.
    Generators return the value of the generated field. Hooks receive the
    record (the id, for delete) and may return a replacement; returning None
    keeps the original.
    """

    def __init__(self, functions: dict[str, Callable] | None = None):
        self._functions: dict[str, Callable] = dict(functions or {})

    def register(self, name: str, func: Callable | None = None):
        if func is None:
            def decorator(f: Callable) -> Callable:
                self._functions[name] = f
                return f
            return decorator

        self._functions[name] = func
        return func

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    def get(self, name: str) -> Callable:
        """Get a registered function.

        Raises:
            MissingHookError: If nothing is registered under that name.
        """
        func = self._functions.get(name)
        if func is None:
            raise MissingHookError([name])
        return func

    def missing(self, synthesis: SynthesisResult) -> list[str]:
        """Names required by the synthesized pipelines but not registered."""
        required: list[str] = []
        for group in synthesis.groups():
            for name in group.hook_functions():
                if name not in self._functions and name not in required:
                    required.append(name)
        return required

    def check(self, synthesis: SynthesisResult) -> None:
        """Raise MissingHookError listing every unregistered function."""
        missing = self.missing(synthesis)
        if missing:
            raise MissingHookError(missing)
