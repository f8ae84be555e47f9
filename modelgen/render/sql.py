"""Relational storage schema (DDL) rendering."""

from ..resolver.pipeline import ResolvedModel
from ..schema.models import Attribute, Entity, Relation
from ..synth.statements import DIALECTS
from ..typemap import FOREIGN_KEY, map_type


def attribute_column(attr: Attribute) -> str:
    """Column definition of an attribute.

    The ID attribute is the primary key. Required attributes are NOT NULL,
    except generated ones, which are filled in after the row is written.
    """
    definition = f"{attr.column_name} {map_type(attr.type).storage}"
    if attr.is_id:
        return f"{definition} NOT NULL PRIMARY KEY"
    if attr.is_required and not attr.is_generated:
        definition = f"{definition} NOT NULL"
    return definition


def relation_column(rel: Relation) -> str:
    definition = f"{rel.column_name} {FOREIGN_KEY.storage}"
    if rel.is_required and not rel.is_generated:
        definition = f"{definition} NOT NULL"
    return definition


def foreign_key(rel: Relation, target: Entity) -> str:
    return f"FOREIGN KEY ({rel.column_name}) REFERENCES {target.table_name}(id)"


def drop_table_statement(entity: Entity, dialect: str) -> str:
    statement = f"DROP TABLE IF EXISTS {entity.table_name}"
    if dialect != "sqlite3":
        statement = f"{statement} CASCADE"
    return statement


def create_table_statement(entity: Entity, resolved: ResolvedModel, dialect: str) -> str:
    columns = [attribute_column(a) for a in entity.attributes]
    columns.extend(relation_column(r) for r in entity.singular_relations())

    # sqlite3 cannot add constraints to existing tables
    if dialect == "sqlite3":
        columns.extend(
            foreign_key(r, resolved.get_entity(r.entity)) for r in entity.singular_relations()
        )

    return f"CREATE TABLE {entity.table_name} ({', '.join(columns)})"


def index_statements(entity: Entity) -> list[str]:
    """One index per non-ID unique or indexed attribute."""
    statements = []
    for attr in entity.attributes:
        if attr.is_id:
            continue
        if not (attr.has_modifier("unique") or attr.has_modifier("indexed")):
            continue

        kind = "UNIQUE INDEX" if attr.has_modifier("unique") else "INDEX"
        name = f"{entity.table_name}_{attr.column_name}"
        statements.append(
            f"CREATE {kind} {name} ON {entity.table_name}({attr.column_name})"
        )
    return statements


def constraint_statements(entity: Entity, resolved: ResolvedModel) -> list[str]:
    return [
        f"ALTER TABLE {entity.table_name} ADD CONSTRAINT "
        f"{entity.table_name}_{r.column_name} "
        f"{foreign_key(r, resolved.get_entity(r.entity))}"
        for r in entity.singular_relations()
    ]


def sql_statements(resolved: ResolvedModel, dialect: str = "sqlite3") -> list[str]:
    """Build the ordered statements that initialize a database.

    Tables are dropped and created in declaration order; indices and
    constraints follow once every table exists.

    Args:
        resolved: The resolved model.
        dialect: "sqlite3" or "postgres".

    Returns:
        The statements, without trailing semicolons.
    """
    if dialect not in DIALECTS:
        raise ValueError(f"Unsupported dialect '{dialect}'")

    statements = []
    for entity in resolved.entities:
        statements.append(drop_table_statement(entity, dialect))
        statements.append(create_table_statement(entity, resolved, dialect))

    for entity in resolved.entities:
        statements.extend(index_statements(entity))
        if dialect != "sqlite3":
            statements.extend(constraint_statements(entity, resolved))

    if dialect == "sqlite3":
        statements.append("PRAGMA foreign_keys = ON")

    return statements


def render_sql(resolved: ResolvedModel, dialect: str = "sqlite3") -> str:
    """Render the storage schema as a SQL script."""
    return "".join(f"{s};\n" for s in sql_statements(resolved, dialect))
