"""Data models for synthesized artifacts."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator

LATENCY_BUCKETS = (0, 5, 10, 50, 100, 250, 500, 1000)


class ArtifactKind(Enum):
    """Kind of artifact group synthesized for an entity."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    FIND_BY_ATTRIBUTE = "find_by_attribute"  # Single row, unique + indexed attribute
    FIND_BY_RELATION = "find_by_relation"  # Paginated, by foreign key
    FIND_ALL = "find_all"  # Paginated, unconditional

    @property
    def is_mutation(self) -> bool:
        return self in (ArtifactKind.CREATE, ArtifactKind.UPDATE, ArtifactKind.DELETE)


class StepKind(Enum):
    """Kind of step in a mutation pipeline."""

    GENERATOR = "generator"
    BEFORE = "before"
    PERSIST = "persist"
    AFTER = "after"


@dataclass
class StorageStatement:
    """A SQL statement and the ordered names of its parameters."""

    sql: str
    params: list[str] = field(default_factory=list)
    columns: list[str] = field(default_factory=list)  # Written or selected columns
    many: bool = False


@dataclass
class WireArgument:
    """An argument of a wire query or mutation."""

    name: str
    type: str
    required: bool = True
    many: bool = False
    member: str | None = None  # Canonical name of the attribute/relation it feeds

    @property
    def type_string(self) -> str:
        s = f"{self.type}!" if self.required else self.type
        return f"[{s}]" if self.many else s


@dataclass
class WireOperation:
    """A query or mutation of the wire schema."""

    name: str
    operation_type: str  # "query" or "mutation"
    returns: str
    returns_many: bool = False
    arguments: list[WireArgument] = field(default_factory=list)

    @property
    def return_string(self) -> str:
        return f"[{self.returns}]" if self.returns_many else f"{self.returns}!"

    def signature(self) -> str:
        args = ", ".join(f"{a.name}: {a.type_string}" for a in self.arguments)
        return f"{self.name}({args}): {self.return_string}"


@dataclass
class MetricSpec:
    """Declaration of a latency histogram or an error counter."""

    name: str
    help: str
    metric_type: str  # "histogram" or "counter"
    buckets: tuple[float, ...] = ()


@dataclass
class PipelineStep:
    """One step of a mutation pipeline."""

    kind: StepKind
    function: str
    member: str | None = None  # Generated attribute/relation, for generators
    argument: str = "record"  # "record", "id" or "result"


@dataclass
class ArtifactGroup:
    """Cross-target artifacts synthesized together for one entity operation."""

    kind: ArtifactKind
    entity: str
    name: str  # Wire operation and resolver name
    function: str  # Persistence function name
    storage: StorageStatement
    wire: WireOperation
    histogram: MetricSpec
    counter: MetricSpec
    member: str | None = None  # Lookup attribute or relation, for finders
    steps: list[PipelineStep] = field(default_factory=list)

    @property
    def resolver(self) -> str:
        return self.name

    def metrics(self) -> list[MetricSpec]:
        return [self.histogram, self.counter]

    def hook_functions(self) -> list[str]:
        """Names of user supplied generators and hooks the pipeline calls."""
        return [s.function for s in self.steps if s.kind != StepKind.PERSIST]


@dataclass
class RelationResolver:
    """Loads the records behind a relation field of an entity.

    Singular relations go through the target's find-by-ID function; hasMany
    relations through the target's finder on its inverse relation.
    """

    entity: str
    relation: str  # Display name
    target: str
    record_field: str  # Holds the related record(s)
    function: str  # Persistence function of the target
    histogram: MetricSpec
    counter: MetricSpec
    many: bool = False

    @property
    def name(self) -> str:
        return f"{self.entity}.{self.relation}"

    def metrics(self) -> list[MetricSpec]:
        return [self.histogram, self.counter]


@dataclass
class EntityArtifacts:
    """Every artifact group of one entity, in synthesis order."""

    entity: str
    groups: list[ArtifactGroup] = field(default_factory=list)
    relations: list[RelationResolver] = field(default_factory=list)

    def get_group(self, name: str) -> ArtifactGroup | None:
        for group in self.groups:
            if group.name == name or group.function == name:
                return group
        return None

    def groups_of_kind(self, kind: ArtifactKind) -> list[ArtifactGroup]:
        return [g for g in self.groups if g.kind == kind]

    def get_relation(self, name: str) -> RelationResolver | None:
        for resolver in self.relations:
            if resolver.relation == name:
                return resolver
        return None


@dataclass
class SynthesisResult:
    """Result of synthesizing a whole model."""

    dialect: str
    entities: list[EntityArtifacts] = field(default_factory=list)

    def __iter__(self) -> Iterator[EntityArtifacts]:
        return iter(self.entities)

    def for_entity(self, name: str) -> EntityArtifacts:
        for artifacts in self.entities:
            if artifacts.entity == name:
                return artifacts
        raise KeyError(name)

    def groups(self) -> Iterator[ArtifactGroup]:
        for artifacts in self.entities:
            yield from artifacts.groups

    def get_group(self, name: str) -> ArtifactGroup | None:
        """Find a group by wire operation or persistence function name."""
        for group in self.groups():
            if group.name == name or group.function == name:
                return group
        return None

    def relation_resolvers(self) -> Iterator[RelationResolver]:
        for artifacts in self.entities:
            yield from artifacts.relations

    def metrics(self) -> list[MetricSpec]:
        specs = [m for g in self.groups() for m in g.metrics()]
        specs.extend(m for r in self.relation_resolvers() for m in r.metrics())
        return specs

    @property
    def total_groups(self) -> int:
        return sum(len(a.groups) for a in self.entities)
