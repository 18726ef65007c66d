"""ValidationDefinition and ValidationPlan — the cached artifacts."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, overload

from modelguard.domain.validators import ConstraintValidator


@dataclass(frozen=True)
class ValidationDefinition:
    """A field paired with an initialized validator and its error metadata."""

    field_name: str
    storage_name: str
    validator: ConstraintValidator[Any]
    message: str = ""
    message_res_id: int = 0


@dataclass(frozen=True)
class ValidationPlan:
    """Ordered validation definitions for one model type.

    Order is field declaration order, then marker attachment order within
    a field. Behaves as a read-only sequence of definitions.
    """

    model_type: type
    definitions: tuple[ValidationDefinition, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.definitions

    def __iter__(self) -> Iterator[ValidationDefinition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    @overload
    def __getitem__(self, index: int) -> ValidationDefinition: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[ValidationDefinition, ...]: ...

    def __getitem__(
        self, index: int | slice
    ) -> ValidationDefinition | tuple[ValidationDefinition, ...]:
        return self.definitions[index]


@dataclass(frozen=True)
class Violation:
    """One failed definition when checking a model instance."""

    field_name: str
    storage_name: str
    message: str
    message_res_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "field_name": self.field_name,
            "storage_name": self.storage_name,
            "message": self.message,
            "message_res_id": self.message_res_id,
        }
