"""Metadata provider interface — how the engine sees a model's fields.

The engine never inspects model classes itself. A provider adapter
(see :mod:`modelguard.infrastructure.metadata`) turns a model type into an
ordered list of :class:`FieldDescriptor` records.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class FieldDescriptor:
    """One declared field of a model type, as reported by a provider.

    Attributes:
        name: Attribute name on the model class.
        value_type: Declared type, either a Python type or a storage
            column type (class or instance).
        storage_name: Column name, or None for fields that are not persisted.
        markers: Objects attached to the field, in attachment order.
    """

    name: str
    value_type: Any
    storage_name: str | None = None
    markers: tuple[object, ...] = field(default_factory=tuple)

    @property
    def is_stored(self) -> bool:
        return self.storage_name is not None


@runtime_checkable
class MetadataProvider(Protocol):
    """Enumerates fields and attached markers for a model type."""

    def fields(self, model_type: type) -> Sequence[FieldDescriptor]:
        """Fields of *model_type* in declaration order."""
        ...

    def markers(self, field: FieldDescriptor) -> Sequence[object]:
        """Markers attached to *field* in attachment order."""
        ...
