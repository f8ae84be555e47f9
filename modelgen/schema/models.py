"""Pydantic models for the modelgen IR."""

from typing import Iterator, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

BUILTIN_TYPES = ("ID", "String", "Int", "Float", "Boolean", "Time")

OPERATIONS = ("create", "update", "delete", "find")
MUTATIONS = ("create", "update", "delete")
LIFECYCLES = ("before", "after")

ATTRIBUTE_MODIFIERS = ("required", "unique", "indexed", "generated")
CARDINALITY_MODIFIERS = ("hasOne", "belongsTo", "hasMany")
RELATION_MODIFIERS = ("required", "generated") + CARDINALITY_MODIFIERS


def _as_list(value):
    """Wrap a scalar into a list, leaving lists and None untouched."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


class UDType(BaseModel):
    """A user defined type: an enum, or a union of values and other types."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    kind: Literal["enum", "union"] = Field(default="enum", alias="type")
    values: list[str] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def normalize_kind(cls, value):
        """Accept kinds in any case (Enum, UNION...)."""
        if isinstance(value, str):
            return value.lower()
        return value

    @field_validator("values", mode="before")
    @classmethod
    def normalize_values(cls, value):
        return [str(v) for v in _as_list(value)]


class _Member(BaseModel):
    """Fields shared by attributes and relations."""

    modifiers: list[str] = Field(default_factory=list)

    # Resolved names, filled in by the naming resolver
    variable_name: str = ""
    field_name: str = ""
    wire_name: str = ""

    @field_validator("modifiers", mode="before")
    @classmethod
    def normalize_modifiers(cls, value):
        return _as_list(value)

    def has_modifier(self, modifier: str) -> bool:
        """Check whether the member carries the given modifier."""
        return modifier in self.modifiers

    @property
    def is_generated(self) -> bool:
        return self.has_modifier("generated")

    @property
    def is_required(self) -> bool:
        return self.has_modifier("required")


class Attribute(_Member):
    """A scalar field of an entity."""

    kind: Literal["attribute"] = "attribute"
    name: str
    type: str = "String"

    column_name: str = ""

    @property
    def is_id(self) -> bool:
        return self.name == "ID"

    @property
    def is_lookup_key(self) -> bool:
        """Unique and indexed attributes get a single-row finder."""
        return self.has_modifier("unique") and self.has_modifier("indexed")

    def canonical_name(self) -> str:
        return self.name


class Relation(_Member):
    """A reference from an entity to another entity."""

    kind: Literal["relation"] = "relation"
    alias: str | None = None
    entity: str

    display_name: str = ""
    column_name: str | None = None

    @property
    def is_singular(self) -> bool:
        """hasOne and belongsTo relations embed a foreign key column."""
        return self.has_modifier("hasOne") or self.has_modifier("belongsTo")

    @property
    def is_collection(self) -> bool:
        return self.has_modifier("hasMany")

    def canonical_name(self) -> str:
        """The display name, or the best guess before names are resolved."""
        return self.display_name or self.alias or self.entity


Member = Attribute | Relation


class Entity(BaseModel):
    """A persisted datatype, defined by its attributes and relations."""

    name: str
    plural: str | None = None
    variable: str | None = None
    attributes: list[Attribute] = Field(default_factory=list)
    relations: list[Relation] = Field(default_factory=list)
    traits: list[str] = Field(default_factory=list)
    hooks: dict[str, list[str]] = Field(default_factory=dict)
    operations: list[str] = Field(default_factory=list)

    # Resolved names, filled in by the naming resolver
    variable_name: str = ""
    plural_name: str = ""
    table_name: str = ""

    @model_validator(mode="before")
    @classmethod
    def normalize_entity(cls, data):
        """Normalize shorthand attribute, relation and hook syntax."""
        if not isinstance(data, dict):
            return data

        # "Email:String" -> {name: Email, type: String}
        attributes = data.get("attributes") or []
        normalized_attrs = []
        for attr in attributes:
            if isinstance(attr, str):
                name, _, type_name = attr.partition(":")
                normalized_attrs.append(
                    {"name": name.strip(), "type": type_name.strip() or "String"}
                )
            else:
                normalized_attrs.append(attr)
        data["attributes"] = normalized_attrs

        # {hasMany: Post} -> {entity: Post, modifiers: [hasMany]}
        relations = data.get("relations") or []
        normalized_rels = []
        for rel in relations:
            if isinstance(rel, dict) and "entity" not in rel:
                for cardinality in CARDINALITY_MODIFIERS:
                    if cardinality in rel:
                        rel = dict(rel)
                        target = rel.pop(cardinality)
                        modifiers = _as_list(rel.get("modifiers"))
                        rel["entity"] = target
                        rel["modifiers"] = [cardinality] + modifiers
                        break
            normalized_rels.append(rel)
        data["relations"] = normalized_rels

        for key in ("traits", "operations"):
            if key in data:
                data[key] = _as_list(data[key])

        hooks = data.get("hooks") or {}
        if isinstance(hooks, dict):
            data["hooks"] = {op: _as_list(lc) for op, lc in hooks.items()}

        return data

    def add_attribute(self, name: str, type_name: str, modifiers: list[str]) -> Attribute:
        """Append a new attribute to the entity."""
        attr = Attribute(name=name, type=type_name, modifiers=list(modifiers))
        self.attributes.append(attr)
        return attr

    def add_relation(
        self, alias: str | None, entity: str, modifiers: list[str]
    ) -> Relation:
        """Append a new, possibly aliased, relation to the entity."""
        rel = Relation(alias=alias, entity=entity, modifiers=list(modifiers))
        self.relations.append(rel)
        return rel

    def get_attribute(self, name: str) -> Attribute | None:
        for attr in self.attributes:
            if attr.name == name:
                return attr
        return None

    @property
    def id_attribute(self) -> Attribute | None:
        return self.get_attribute("ID")

    def members(self) -> Iterator[Member]:
        """Iterate attributes, then relations, in declaration order."""
        yield from self.attributes
        yield from self.relations

    def singular_relations(self) -> list[Relation]:
        return [r for r in self.relations if r.is_singular]

    def generated_members(self) -> list[Member]:
        return [m for m in self.members() if m.is_generated]

    def supports_operation(self, operation: str) -> bool:
        return operation in self.operations

    def has_hook(self, operation: str, lifecycle: str) -> bool:
        return lifecycle in self.hooks.get(operation, [])

    def preferred_sort_attribute(self) -> Attribute | None:
        """First non-ID unique or indexed attribute, else the ID attribute."""
        for attr in self.attributes:
            if attr.is_id:
                continue
            if attr.has_modifier("unique") or attr.has_modifier("indexed"):
                return attr
        return self.id_attribute


class Model(BaseModel):
    """Root of a model document."""

    types: list[UDType] = Field(default_factory=list)
    entities: list[Entity] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def normalize_model(cls, data):
        """Accept entities keyed by name as well as a list."""
        if not isinstance(data, dict):
            return data

        entities = data.get("entities")
        if isinstance(entities, dict):
            normalized = []
            for name, entity_data in entities.items():
                entity_data = dict(entity_data or {})
                entity_data.setdefault("name", name)
                normalized.append(entity_data)
            data["entities"] = normalized
        elif entities is None:
            data["entities"] = []

        if data.get("types") is None:
            data["types"] = []

        return data

    def get_entity(self, name: str) -> Entity | None:
        """Get an entity by name."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None

    def get_type(self, name: str) -> UDType | None:
        """Get a user defined type by name."""
        for udtype in self.types:
            if udtype.name == name:
                return udtype
        return None

    def get_all_entity_names(self) -> list[str]:
        """Get all entity names, in declaration order."""
        return [e.name for e in self.entities]
