"""SQLAlchemy metadata provider.

Reads field metadata from mapped classes via ``sqlalchemy.inspect``.
Constraint markers are attached through the column ``info`` dict::

    class User(Base):
        __tablename__ = "users"

        id: Mapped[int] = mapped_column(primary_key=True)
        email: Mapped[str] = mapped_column(
            info={"constraints": [NotNull(message="Email is required")]}
        )

Column fields come first, in table column order (base tables before
subclass tables under joined inheritance). Relationships follow as
unstored fields.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import NoInspectionAvailable
from sqlalchemy.orm import Mapper
from sqlalchemy.orm.exc import UnmappedColumnError

from modelguard.domain.metadata import FieldDescriptor

DEFAULT_INFO_KEY = "constraints"


class SQLAlchemyMetadataProvider:
    """:class:`~modelguard.domain.metadata.MetadataProvider` for ORM classes."""

    def __init__(self, info_key: str = DEFAULT_INFO_KEY) -> None:
        self._info_key = info_key

    @property
    def info_key(self) -> str:
        return self._info_key

    def fields(self, model_type: type) -> Sequence[FieldDescriptor]:
        mapper = _mapper_for(model_type)
        result: list[FieldDescriptor] = []
        seen: set[str] = set()

        for table in _tables_root_first(mapper):
            for column in table.columns:
                try:
                    prop = mapper.get_property_by_column(column)
                except UnmappedColumnError:
                    continue
                if prop.key in seen:
                    continue
                seen.add(prop.key)
                result.append(
                    FieldDescriptor(
                        name=prop.key,
                        value_type=column.type,
                        storage_name=column.name,
                        markers=_as_markers(column.info.get(self._info_key)),
                    )
                )

        for rel in mapper.relationships:
            if rel.key in seen:
                continue
            seen.add(rel.key)
            result.append(
                FieldDescriptor(
                    name=rel.key,
                    value_type=rel.entity.class_,
                    storage_name=None,
                    markers=_as_markers(rel.info.get(self._info_key)),
                )
            )
        return result

    def markers(self, field: FieldDescriptor) -> Sequence[object]:
        return field.markers


def _mapper_for(model_type: type) -> Mapper[Any]:
    try:
        mapper = sa_inspect(model_type)
    except NoInspectionAvailable as exc:
        msg = f"{model_type!r} is not a mapped class"
        raise TypeError(msg) from exc
    if not isinstance(mapper, Mapper):
        msg = f"{model_type!r} is not a mapped class"
        raise TypeError(msg)
    return mapper


def _tables_root_first(mapper: Mapper[Any]) -> list[Any]:
    """Local tables from the inheritance root down to *mapper*, deduplicated."""
    tables: list[Any] = []
    for m in reversed(list(mapper.iterate_to_root())):
        table = m.local_table
        if table is not None and not any(t is table for t in tables):
            tables.append(table)
    return tables


def _as_markers(raw: object) -> tuple[object, ...]:
    if raw is None:
        return ()
    if isinstance(raw, list | tuple):
        return tuple(raw)
    return (raw,)
