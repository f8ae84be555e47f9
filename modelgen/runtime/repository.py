"""Persistence functions over a DB-API connection."""

from functools import partial
from typing import Any

from ..config.logging import get_logger
from ..render.sql import sql_statements
from ..resolver.pipeline import ResolvedModel
from ..schema.models import Entity
from ..synth.models import ArtifactGroup, ArtifactKind, SynthesisResult
from ..typemap import map_type
from .errors import NotFoundError, RepositoryError
from .records import build_record_types

logger = get_logger(__name__)


class Repository:
    """The persistence functions of a synthesized model.

    Every persistence function of the synthesis is exposed as an attribute,
    under its synthesized name::

        repo.insert_user(user)
        repo.find_user_by_id("1")
        repo.find_users_by_organization("1", 10, 0)

    Insert, update and delete run in their own transaction: committed once
    the statement succeeded, rolled back on any error.

    Args:
        conn: An open DB-API connection whose paramstyle matches the
            synthesis dialect.
        resolved: The resolved model.
        synthesis: The artifact groups synthesized from the same model.
        records: Record types by entity name; built from the model if omitted.
    """

    def __init__(
        self,
        conn,
        resolved: ResolvedModel,
        synthesis: SynthesisResult,
        records: dict[str, type] | None = None,
    ):
        self.conn = conn
        self.resolved = resolved
        self.synthesis = synthesis
        self.records = records or build_record_types(resolved)
        self._groups = {g.function: g for g in synthesis.groups()}

    def __getattr__(self, name: str):
        groups = self.__dict__.get("_groups", {})
        group = groups.get(name)
        if group is None:
            raise AttributeError(f"{type(self).__name__} has no persistence function '{name}'")
        return partial(self.call, group)

    @property
    def functions(self) -> list[str]:
        return list(self._groups)

    def create_schema(self) -> None:
        """Run the storage schema statements of the synthesis dialect."""
        cursor = self.conn.cursor()
        try:
            for statement in sql_statements(self.resolved, self.synthesis.dialect):
                cursor.execute(statement)
            self.conn.commit()
        finally:
            cursor.close()

    def call(self, group: ArtifactGroup, *args):
        """Run the persistence function of an artifact group."""
        entity = self.resolved.get_entity(group.entity)

        if group.kind in (ArtifactKind.CREATE, ArtifactKind.UPDATE):
            (record,) = args
            values = self.column_values(entity, record)
            self._write(group, [values[p] for p in group.storage.params])
            return record

        if group.kind == ArtifactKind.DELETE:
            (record_id,) = args
            self._write(group, [record_id])
            return None

        if group.kind == ArtifactKind.FIND_BY_ATTRIBUTE:
            (value,) = args
            row = self._read(group, [value], many=False)
            if row is None:
                raise NotFoundError(group.function, entity.name, group.member, value)
            return self.to_record(entity, row)

        rows = self._read(group, list(args), many=True)
        return [self.to_record(entity, row) for row in rows]

    def _write(self, group: ArtifactGroup, params: list) -> None:
        cursor = self.conn.cursor()
        try:
            cursor.execute(group.storage.sql, params)
            self.conn.commit()
        except Exception as e:
            self.conn.rollback()
            logger.error("Error calling function %s: %s", group.function, e)
            raise RepositoryError(group.function, str(e)) from e
        finally:
            cursor.close()

    def _read(self, group: ArtifactGroup, params: list, many: bool):
        cursor = self.conn.cursor()
        try:
            cursor.execute(group.storage.sql, params)
            return cursor.fetchall() if many else cursor.fetchone()
        except Exception as e:
            logger.error("Error calling function %s: %s", group.function, e)
            raise RepositoryError(group.function, str(e)) from e
        finally:
            cursor.close()

    def column_values(self, entity: Entity, record) -> dict[str, Any]:
        """Map a record to column values, by column name.

        Singular relations contribute the id of the related record; a plain
        id is accepted as well.
        """
        values = {a.column_name: getattr(record, a.field_name) for a in entity.attributes}
        for rel in entity.singular_relations():
            related = getattr(record, rel.field_name)
            if related is not None and not isinstance(related, str):
                related = getattr(related, "id", None)
            values[rel.column_name] = related
        return values

    def to_record(self, entity: Entity, row):
        """Build a record from a row selected in table column order."""
        record = self.records[entity.name]()
        values = iter(row)

        for attr in entity.attributes:
            value = next(values)
            if value is not None:
                value = map_type(attr.type).python(value)
            setattr(record, attr.field_name, value)

        for rel in entity.singular_relations():
            value = next(values)
            setattr(record, rel.field_name, self.stub(rel.entity, value))

        return record

    def stub(self, entity_name: str, record_id):
        """A record of the given entity holding only its id."""
        if record_id is None:
            return None
        record = self.records[entity_name]()
        record.id = str(record_id)
        return record
