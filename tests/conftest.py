"""Shared pytest fixtures and test helpers for modelguard tests."""

from __future__ import annotations

import threading
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from sqlalchemy import Integer

from modelguard.domain.constraints import Constraint, constraint
from modelguard.domain.metadata import FieldDescriptor
from modelguard.domain.validators import ConstraintValidator
from modelguard.services.plan_builder import ValidationPlanBuilder
from modelguard.services.plan_cache import ValidationPlanCache

# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


class IntValidator(ConstraintValidator[int]):
    """Accepts plain ``int`` fields."""

    @classmethod
    def accepted_type(cls) -> type:
        return int

    def validate(self, value: int | None) -> bool:
        return isinstance(value, int)


class IntegerColumnValidator(ConstraintValidator[int]):
    """Declared against the storage type rather than the value type."""

    @classmethod
    def accepted_type(cls) -> type:
        return Integer

    def validate(self, value: int | None) -> bool:
        return value is not None


class StrValidator(ConstraintValidator[str]):
    @classmethod
    def accepted_type(cls) -> type:
        return str

    def validate(self, value: str | None) -> bool:
        return isinstance(value, str)


class ObjectValidator(ConstraintValidator[object]):
    @classmethod
    def accepted_type(cls) -> type:
        return object

    def validate(self, value: object) -> bool:
        return True


class RecordingValidator(ConstraintValidator[object]):
    """Keeps the marker it was initialized with."""

    @classmethod
    def accepted_type(cls) -> type:
        return object

    def __init__(self) -> None:
        self.marker: object = None

    def initialize(self, marker: Any) -> None:
        self.marker = marker

    def validate(self, value: object) -> bool:
        return True


class PositiveValidator(ConstraintValidator[int]):
    """Reads ``minimum`` from its marker."""

    @classmethod
    def accepted_type(cls) -> type:
        return int

    def __init__(self) -> None:
        self.minimum = 0

    def initialize(self, marker: Any) -> None:
        self.minimum = marker.minimum

    def validate(self, value: int | None) -> bool:
        return value is not None and value >= self.minimum


class FailingInitValidator(ConstraintValidator[object]):
    @classmethod
    def accepted_type(cls) -> type:
        return object

    def initialize(self, marker: Any) -> None:
        msg = "bad parameters"
        raise ValueError(msg)

    def validate(self, value: object) -> bool:
        return True


class FailingConstructorValidator(ConstraintValidator[object]):
    @classmethod
    def accepted_type(cls) -> type:
        return object

    def __init__(self, required: str) -> None:
        self.required = required

    def validate(self, value: object) -> bool:
        return True


# ---------------------------------------------------------------------------
# Constraint markers
# ---------------------------------------------------------------------------


@constraint(IntValidator)
class IsInt(Constraint):
    pass


@constraint(StrValidator)
class IsStr(Constraint):
    pass


@constraint(RecordingValidator)
class Recorded(Constraint):
    tag: str = ""


@constraint(PositiveValidator)
class AtLeast(Constraint):
    minimum: int = 0


@constraint(FailingInitValidator)
class BrokenInit(Constraint):
    pass


@constraint(FailingConstructorValidator)
class BrokenConstructor(Constraint):
    pass


# ---------------------------------------------------------------------------
# Fake metadata provider
# ---------------------------------------------------------------------------


class FakeProvider:
    """In-memory MetadataProvider keyed by model type.

    ``fields_calls`` counts scans per type. An optional *on_fields* hook
    runs inside every scan, so tests can slow a build down or block it.
    """

    def __init__(
        self,
        models: dict[type, Sequence[FieldDescriptor]] | None = None,
        on_fields: Callable[[type], None] | None = None,
    ) -> None:
        self.models: dict[type, Sequence[FieldDescriptor]] = dict(models or {})
        self.on_fields = on_fields
        self.fields_calls: dict[type, int] = {}
        self._lock = threading.Lock()

    def fields(self, model_type: type) -> Sequence[FieldDescriptor]:
        with self._lock:
            self.fields_calls[model_type] = self.fields_calls.get(model_type, 0) + 1
        if self.on_fields is not None:
            self.on_fields(model_type)
        return list(self.models.get(model_type, ()))

    def markers(self, field: FieldDescriptor) -> Sequence[object]:
        return field.markers


def stored(name: str, value_type: Any, *markers: object) -> FieldDescriptor:
    """Build a persisted field whose column name matches its attribute name."""
    return FieldDescriptor(name=name, value_type=value_type, storage_name=name, markers=markers)


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def builder(provider: FakeProvider) -> ValidationPlanBuilder:
    return ValidationPlanBuilder(provider)


@pytest.fixture
def cache(builder: ValidationPlanBuilder) -> ValidationPlanCache:
    return ValidationPlanCache(builder)
