"""Storage statements for the persistence functions of an entity."""

from ..schema.models import Entity
from .models import StorageStatement

DIALECTS = ("sqlite3", "postgres")


class Placeholders:
    """Hands out positional placeholders in the style of a SQL dialect."""

    def __init__(self, dialect: str):
        if dialect not in DIALECTS:
            raise ValueError(f"Unsupported dialect '{dialect}'")
        self.dialect = dialect
        self.count = 0

    def next(self) -> str:
        self.count += 1
        if self.dialect == "postgres":
            return f"${self.count}"
        return "?"


def table_columns(entity: Entity) -> list[str]:
    """Every column of the entity table: attributes, then foreign keys."""
    columns = [a.column_name for a in entity.attributes]
    columns.extend(r.column_name for r in entity.singular_relations())
    return columns


def write_columns(entity: Entity) -> list[str]:
    """Columns written by insert and update statements.

    Generated attributes are left out; every singular relation contributes
    its foreign key column.
    """
    columns = [a.column_name for a in entity.attributes if not a.is_generated]
    columns.extend(r.column_name for r in entity.singular_relations())
    return columns


def sort_column(entity: Entity) -> str:
    attr = entity.preferred_sort_attribute()
    return attr.column_name if attr is not None else "id"


def insert_statement(entity: Entity, dialect: str) -> StorageStatement:
    p = Placeholders(dialect)
    columns = write_columns(entity)
    values = ", ".join(p.next() for _ in columns)
    sql = f"INSERT INTO {entity.table_name} ({', '.join(columns)}) VALUES ({values})"
    return StorageStatement(sql=sql, params=list(columns), columns=columns)


def update_statement(entity: Entity, dialect: str) -> StorageStatement:
    p = Placeholders(dialect)
    columns = write_columns(entity)
    assignments = ", ".join(f"{c} = {p.next()}" for c in columns)
    sql = f"UPDATE {entity.table_name} SET {assignments} WHERE id = {p.next()}"
    return StorageStatement(sql=sql, params=columns + ["id"], columns=columns)


def delete_statement(entity: Entity, dialect: str) -> StorageStatement:
    p = Placeholders(dialect)
    sql = f"DELETE FROM {entity.table_name} WHERE id = {p.next()}"
    return StorageStatement(sql=sql, params=["id"])


def find_by_column_statement(entity: Entity, column: str, dialect: str) -> StorageStatement:
    """Single row lookup on a unique column."""
    p = Placeholders(dialect)
    columns = table_columns(entity)
    sql = (
        f"SELECT {', '.join(columns)} FROM {entity.table_name} "
        f"WHERE {column} = {p.next()}"
    )
    return StorageStatement(sql=sql, params=[column], columns=columns)


def find_page_statement(
    entity: Entity, dialect: str, column: str | None = None
) -> StorageStatement:
    """Paginated lookup, optionally filtered on a foreign key column."""
    p = Placeholders(dialect)
    columns = table_columns(entity)
    params: list[str] = []

    chunks = [f"SELECT {', '.join(columns)} FROM {entity.table_name}"]
    if column is not None:
        chunks.append(f"WHERE {column} = {p.next()}")
        params.append(column)
    chunks.append(f"ORDER BY {sort_column(entity)}")
    chunks.append(f"LIMIT {p.next()} OFFSET {p.next()}")
    params.extend(["limit", "offset"])

    return StorageStatement(sql=" ".join(chunks), params=params, columns=columns, many=True)
