"""Operation-set synthesis.

Walks a resolved model and enumerates, for every entity, the exact artifact
groups every renderer and the runtime must produce.
"""

from ..config.logging import get_logger
from ..resolver.naming import snake_case
from ..resolver.pipeline import ResolvedModel
from ..schema.models import Attribute, Entity, Member, Relation
from ..typemap import FOREIGN_KEY, map_type
from .models import (
    LATENCY_BUCKETS,
    ArtifactGroup,
    ArtifactKind,
    EntityArtifacts,
    MetricSpec,
    PipelineStep,
    StepKind,
    RelationResolver,
    StorageStatement,
    SynthesisResult,
    WireArgument,
    WireOperation,
)
from .statements import (
    delete_statement,
    find_by_column_statement,
    find_page_statement,
    insert_statement,
    update_statement,
)

logger = get_logger(__name__)


def _pagination() -> list[WireArgument]:
    return [WireArgument(name="limit", type="Int"), WireArgument(name="offset", type="Int")]


def synthesize(resolved: ResolvedModel, dialect: str = "sqlite3") -> SynthesisResult:
    """Synthesize the artifact groups of every entity, in declaration order.

    Args:
        resolved: The resolved model.
        dialect: SQL dialect of the storage statements.

    Returns:
        SynthesisResult with one EntityArtifacts per entity.
    """
    result = SynthesisResult(dialect=dialect)

    for entity in resolved.entities:
        artifacts = synthesize_entity(entity, dialect)
        logger.debug("Synthesized %d artifact group(s) for %s", len(artifacts.groups), entity.name)
        result.entities.append(artifacts)

    for entity, artifacts in zip(resolved.entities, result.entities):
        artifacts.relations = relation_resolvers(entity, resolved, result)

    return result


def synthesize_entity(entity: Entity, dialect: str = "sqlite3") -> EntityArtifacts:
    """Synthesize the artifact groups of a single resolved entity."""
    artifacts = EntityArtifacts(entity=entity.name)
    groups = artifacts.groups

    if entity.supports_operation("create"):
        groups.append(_mutation_group(entity, ArtifactKind.CREATE, insert_statement(entity, dialect)))

    if entity.supports_operation("update"):
        groups.append(_mutation_group(entity, ArtifactKind.UPDATE, update_statement(entity, dialect)))

    if entity.supports_operation("delete"):
        groups.append(_delete_group(entity, dialect))

    if entity.supports_operation("find"):
        for attr in entity.attributes:
            if attr.is_lookup_key:
                groups.append(_find_by_attribute_group(entity, attr, dialect))

        for rel in entity.singular_relations():
            groups.append(_find_by_relation_group(entity, rel, dialect))

        groups.append(_find_all_group(entity, dialect))

    return artifacts


# -----------------------------------------------------------------------------
# Names
# -----------------------------------------------------------------------------


def mutation_name(entity: Entity, kind: ArtifactKind) -> str:
    return f"{kind.value}{entity.name}"


def find_by_attribute_name(entity: Entity, attr: Attribute) -> str:
    return f"find{entity.name}By{attr.name}"


def find_by_relation_name(entity: Entity, rel: Relation) -> str:
    return f"find{entity.plural_name}By{rel.display_name}"


def find_all_name(entity: Entity) -> str:
    return f"findAll{entity.plural_name}"


def persistence_function_name(entity: Entity, kind: ArtifactKind, wire_name: str) -> str:
    """Python name of the persistence function behind a wire operation."""
    if kind == ArtifactKind.CREATE:
        return f"insert_{snake_case(entity.name)}"
    return snake_case(wire_name)


def generator_function_name(entity: Entity, member: Member, operation: str) -> str:
    return f"generate_{snake_case(entity.name)}_{snake_case(member.canonical_name())}_on_{operation}"


def hook_function_name(entity: Entity, operation: str, lifecycle: str) -> str:
    return f"{lifecycle}_{operation}_{snake_case(entity.name)}"


# -----------------------------------------------------------------------------
# Metrics
# -----------------------------------------------------------------------------


def _metrics(wire_name: str, action: str) -> tuple[MetricSpec, MetricSpec]:
    """Latency histogram and error counter for one artifact group."""
    histogram = MetricSpec(
        name=snake_case(f"{wire_name}Latencies"),
        help=f"Elapsed time in milliseconds to {action}",
        metric_type="histogram",
        buckets=LATENCY_BUCKETS,
    )
    counter = MetricSpec(
        name=snake_case(f"{wire_name}Errors"),
        help=f"Errors when trying to {action}",
        metric_type="counter",
    )
    return histogram, counter


# -----------------------------------------------------------------------------
# Artifact groups
# -----------------------------------------------------------------------------


def mutation_arguments(entity: Entity) -> list[WireArgument]:
    """Caller supplied fields: non-generated attributes, then foreign keys."""
    args = [
        WireArgument(name=a.wire_name, type=map_type(a.type).wire, member=a.name)
        for a in entity.attributes
        if not a.is_generated
    ]
    args.extend(
        WireArgument(name=r.wire_name, type=FOREIGN_KEY.wire, member=r.display_name)
        for r in entity.singular_relations()
        if not r.is_generated
    )
    return args


def mutation_steps(entity: Entity, operation: str, function: str) -> list[PipelineStep]:
    """Ordered pipeline: generators, before hook, persistence, after hook."""
    steps = []
    argument = "id" if operation == "delete" else "record"

    if operation in ("create", "update"):
        for member in entity.generated_members():
            steps.append(
                PipelineStep(
                    kind=StepKind.GENERATOR,
                    function=generator_function_name(entity, member, operation),
                    member=member.canonical_name(),
                )
            )

    if entity.has_hook(operation, "before"):
        steps.append(
            PipelineStep(
                kind=StepKind.BEFORE,
                function=hook_function_name(entity, operation, "before"),
                argument=argument,
            )
        )

    steps.append(PipelineStep(kind=StepKind.PERSIST, function=function, argument=argument))

    if entity.has_hook(operation, "after"):
        steps.append(
            PipelineStep(
                kind=StepKind.AFTER,
                function=hook_function_name(entity, operation, "after"),
                argument="id" if operation == "delete" else "result",
            )
        )

    return steps


def _mutation_group(
    entity: Entity, kind: ArtifactKind, storage: StorageStatement
) -> ArtifactGroup:
    name = mutation_name(entity, kind)
    function = persistence_function_name(entity, kind, name)
    histogram, counter = _metrics(name, f"{kind.value} entities of type {entity.name}")

    return ArtifactGroup(
        kind=kind,
        entity=entity.name,
        name=name,
        function=function,
        storage=storage,
        wire=WireOperation(
            name=name,
            operation_type="mutation",
            returns=entity.name,
            arguments=mutation_arguments(entity),
        ),
        histogram=histogram,
        counter=counter,
        steps=mutation_steps(entity, kind.value, function),
    )


def _delete_group(entity: Entity, dialect: str) -> ArtifactGroup:
    kind = ArtifactKind.DELETE
    name = mutation_name(entity, kind)
    function = persistence_function_name(entity, kind, name)
    histogram, counter = _metrics(name, f"delete entities of type {entity.name}")

    return ArtifactGroup(
        kind=kind,
        entity=entity.name,
        name=name,
        function=function,
        storage=delete_statement(entity, dialect),
        wire=WireOperation(
            name=name,
            operation_type="mutation",
            returns=entity.name,
            arguments=[WireArgument(name="id", type=FOREIGN_KEY.wire, member="ID")],
        ),
        histogram=histogram,
        counter=counter,
        steps=mutation_steps(entity, kind.value, function),
    )


def _find_by_attribute_group(entity: Entity, attr: Attribute, dialect: str) -> ArtifactGroup:
    kind = ArtifactKind.FIND_BY_ATTRIBUTE
    name = find_by_attribute_name(entity, attr)
    histogram, counter = _metrics(name, f"find entities of type {entity.name} by {attr.name}")

    return ArtifactGroup(
        kind=kind,
        entity=entity.name,
        name=name,
        function=persistence_function_name(entity, kind, name),
        storage=find_by_column_statement(entity, attr.column_name, dialect),
        wire=WireOperation(
            name=name,
            operation_type="query",
            returns=entity.name,
            arguments=[
                WireArgument(name=attr.wire_name, type=map_type(attr.type).wire, member=attr.name)
            ],
        ),
        histogram=histogram,
        counter=counter,
        member=attr.name,
    )


def _find_by_relation_group(entity: Entity, rel: Relation, dialect: str) -> ArtifactGroup:
    kind = ArtifactKind.FIND_BY_RELATION
    name = find_by_relation_name(entity, rel)
    histogram, counter = _metrics(
        name, f"find entities of type {entity.name} by {rel.display_name}"
    )

    return ArtifactGroup(
        kind=kind,
        entity=entity.name,
        name=name,
        function=persistence_function_name(entity, kind, name),
        storage=find_page_statement(entity, dialect, column=rel.column_name),
        wire=WireOperation(
            name=name,
            operation_type="query",
            returns=entity.name,
            returns_many=True,
            arguments=[
                WireArgument(name=rel.wire_name, type=FOREIGN_KEY.wire, member=rel.display_name),
                *_pagination(),
            ],
        ),
        histogram=histogram,
        counter=counter,
        member=rel.display_name,
    )


def _find_all_group(entity: Entity, dialect: str) -> ArtifactGroup:
    kind = ArtifactKind.FIND_ALL
    name = find_all_name(entity)
    histogram, counter = _metrics(name, f"find all entities of type {entity.name}")

    return ArtifactGroup(
        kind=kind,
        entity=entity.name,
        name=name,
        function=persistence_function_name(entity, kind, name),
        storage=find_page_statement(entity, dialect),
        wire=WireOperation(
            name=name,
            operation_type="query",
            returns=entity.name,
            returns_many=True,
            arguments=_pagination(),
        ),
        histogram=histogram,
        counter=counter,
    )


# -----------------------------------------------------------------------------
# Relation resolvers
# -----------------------------------------------------------------------------


def relation_loader(
    entity: Entity, rel: Relation, resolved: ResolvedModel, synthesis: SynthesisResult
) -> ArtifactGroup | None:
    """The target's finder that loads the records behind a relation.

    Singular relations load by ID; hasMany relations page through the
    target's finder on the first singular relation pointing back.
    """
    target = synthesis.for_entity(rel.entity)

    if rel.is_singular:
        for group in target.groups_of_kind(ArtifactKind.FIND_BY_ATTRIBUTE):
            if group.member == "ID":
                return group
        return None

    for inverse in resolved.get_entity(rel.entity).singular_relations():
        if inverse.entity != entity.name:
            continue
        for group in target.groups_of_kind(ArtifactKind.FIND_BY_RELATION):
            if group.member == inverse.display_name:
                return group
    return None


def relation_resolvers(
    entity: Entity, resolved: ResolvedModel, synthesis: SynthesisResult
) -> list[RelationResolver]:
    """One resolver per relation whose target can load it."""
    resolvers = []

    for rel in entity.relations:
        loader = relation_loader(entity, rel, resolved, synthesis)
        if loader is None:
            logger.debug(
                "Relation %s.%s has no finder on %s", entity.name, rel.display_name, rel.entity
            )
            continue

        wire_name = f"resolve{entity.name}{rel.display_name}"
        histogram, counter = _metrics(
            wire_name, f"resolve {rel.display_name} of entities of type {entity.name}"
        )
        resolvers.append(
            RelationResolver(
                entity=entity.name,
                relation=rel.display_name,
                target=rel.entity,
                record_field=rel.field_name,
                function=loader.function,
                histogram=histogram,
                counter=counter,
                many=rel.is_collection,
            )
        )

    return resolvers
