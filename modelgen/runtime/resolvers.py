"""Resolvers executing wire operations through their synthesized pipelines."""

import time
from functools import partial

from ..config.logging import get_logger
from ..schema.models import Entity
from ..synth.models import ArtifactGroup, ArtifactKind, StepKind
from ..typemap import map_type
from .errors import MutationError, QueryError
from .hooks import HookRegistry
from .metrics import MetricsRegistry
from .repository import Repository

logger = get_logger(__name__)


class ResolverSet:
    """One resolver per wire operation of a synthesized model.

    Resolvers are exposed as attributes under their wire operation name and
    take the wire arguments as keyword arguments::

        resolvers.createUser(id="1", email="a@b.c", organization="1")
        resolvers.findUsersByOrganization(organization="1", limit=10, offset=0)

    Every call observes its latency, in milliseconds, on success; a failing
    step stops the call, increments the error counter of the operation and
    raises MutationError or QueryError naming the failing function.

    Generators and hooks are called with the repository as storage handle,
    followed by the record (the id, for delete). Relation fields are loaded
    with :meth:`resolve_relation`.

    Raises:
        MissingHookError: If ``hooks`` lacks a generator or hook that the
            synthesized pipelines call.
    """

    def __init__(
        self,
        repository: Repository,
        hooks: HookRegistry | None = None,
        metrics: MetricsRegistry | None = None,
    ):
        self.repository = repository
        self.hooks = hooks or HookRegistry()
        self.metrics = metrics or MetricsRegistry()

        synthesis = repository.synthesis
        self.hooks.check(synthesis)
        self.metrics.register_all(synthesis)
        self._groups = {g.name: g for g in synthesis.groups()}
        self._relations = {r.name: r for r in synthesis.relation_resolvers()}

    def __getattr__(self, name: str):
        groups = self.__dict__.get("_groups", {})
        if name not in groups:
            raise AttributeError(f"{type(self).__name__} has no operation '{name}'")
        return partial(self.execute, name)

    def execute(self, operation: str, **args):
        """Run a wire operation with the given arguments."""
        group = self._groups.get(operation)
        if group is None:
            raise KeyError(f"Unknown operation '{operation}'")

        entity = self.repository.resolved.get_entity(group.entity)
        started = time.perf_counter()
        state = {"function": group.name}

        try:
            if group.kind.is_mutation:
                result = self._mutate(group, entity, args, state)
            else:
                result = self._query(group, args, state)
        except Exception as e:
            self.metrics.inc(group.counter.name)
            logger.error("%s failed in %s: %s", group.name, state["function"], e)
            error_class = MutationError if group.kind.is_mutation else QueryError
            raise error_class(group.name, state["function"], e) from e

        elapsed = (time.perf_counter() - started) * 1000
        self.metrics.observe(group.histogram.name, elapsed)
        logger.debug("%s completed in %.2fms", group.name, elapsed)
        return result

    def resolve_relation(
        self, record, relation: str, limit: int | None = None, offset: int = 0
    ):
        """Load the records behind a relation field of a record.

        The loaded record (or, for hasMany relations, the page of records)
        replaces the field value and is returned. Singular relations without
        a value resolve to None.

        Raises:
            KeyError: If the relation cannot be resolved.
            ValueError: If a hasMany relation is resolved without a limit.
            QueryError: If loading fails.
        """
        name = f"{record.__entity__}.{relation}"
        resolver = self._relations.get(name)
        if resolver is None:
            raise KeyError(f"Unknown relation '{name}'")
        if resolver.many and limit is None:
            raise ValueError(f"Relation '{name}' is paginated, a limit is required")

        load = getattr(self.repository, resolver.function)
        started = time.perf_counter()

        try:
            if resolver.many:
                value = load(record.id, limit, offset)
            else:
                related = getattr(record, resolver.record_field)
                related_id = getattr(related, "id", related)
                value = None if related_id is None else load(related_id)
        except Exception as e:
            self.metrics.inc(resolver.counter.name)
            logger.error("%s failed in %s: %s", name, resolver.function, e)
            raise QueryError(name, resolver.function, e) from e

        self.metrics.observe(resolver.histogram.name, (time.perf_counter() - started) * 1000)
        setattr(record, resolver.record_field, value)
        return value

    def _mutate(self, group: ArtifactGroup, entity: Entity, args: dict, state: dict):
        if group.kind == ArtifactKind.DELETE:
            subject = args.get("id")
        else:
            subject = self.build_record(group, entity, args)
        result = subject

        for step in group.steps:
            state["function"] = step.function

            if step.kind == StepKind.GENERATOR:
                member = next(m for m in entity.members() if m.canonical_name() == step.member)
                generated = self.hooks.get(step.function)(self.repository, subject)
                setattr(subject, member.field_name, generated)

            elif step.kind == StepKind.BEFORE:
                replaced = self.hooks.get(step.function)(self.repository, subject)
                if replaced is not None:
                    subject = replaced

            elif step.kind == StepKind.PERSIST:
                persisted = getattr(self.repository, step.function)(subject)
                if group.kind == ArtifactKind.DELETE:
                    result = self.repository.stub(entity.name, subject)
                else:
                    result = persisted

            elif step.kind == StepKind.AFTER:
                argument = subject if group.kind == ArtifactKind.DELETE else result
                replaced = self.hooks.get(step.function)(self.repository, argument)
                if replaced is not None and group.kind != ArtifactKind.DELETE:
                    result = replaced

        return result

    def _query(self, group: ArtifactGroup, args: dict, state: dict):
        state["function"] = group.function
        values = [args.get(a.name) for a in group.wire.arguments]
        return getattr(self.repository, group.function)(*values)

    def build_record(self, group: ArtifactGroup, entity: Entity, args: dict):
        """Build a record from the wire arguments of a create/update mutation."""
        record = self.repository.records[entity.name]()

        for arg in group.wire.arguments:
            value = args.get(arg.name)
            attr = entity.get_attribute(arg.member)
            if attr is not None:
                if value is not None:
                    value = map_type(attr.type).python(value)
                setattr(record, attr.field_name, value)
                continue

            rel = next(r for r in entity.relations if r.display_name == arg.member)
            setattr(record, rel.field_name, self.repository.stub(rel.entity, value))

        return record
