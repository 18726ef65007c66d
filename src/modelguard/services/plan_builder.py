"""ValidationPlanBuilder — scans one model type into a ValidationPlan.

INVARIANT: Construction is all-or-nothing. Any unresolved constraint,
failing validator, or unreadable marker aborts the build; no partial plan
ever leaves this module.
"""

from __future__ import annotations

import logging
import numbers
import time
from typing import Any

from modelguard.domain.constraints import constraint_name, constraint_validators
from modelguard.domain.definitions import ValidationDefinition, ValidationPlan
from modelguard.domain.errors import (
    MetadataAccessError,
    UnresolvedValidatorError,
    ValidatorInitializationError,
)
from modelguard.domain.metadata import FieldDescriptor, MetadataProvider
from modelguard.domain.resolution import resolve_validator
from modelguard.domain.validators import ConstraintValidator

# Accessors every constraint marker must expose.
MESSAGE_ACCESSOR = "message"
MESSAGE_RES_ACCESSOR = "message_res_id"

logger = logging.getLogger(__name__)


class ValidationPlanBuilder:
    """Builds validation plans from provider-supplied field metadata.

    Usage::

        builder = ValidationPlanBuilder(SQLAlchemyMetadataProvider())
        plan = builder.build_plan(User)
    """

    def __init__(self, provider: MetadataProvider) -> None:
        self._provider = provider

    @property
    def provider(self) -> MetadataProvider:
        return self._provider

    def build_plan(self, model_type: type) -> ValidationPlan:
        """Scan *model_type* and return its ordered validation plan.

        Raises:
            UnresolvedValidatorError: A constraint has no validator for
                the field's type.
            ValidatorInitializationError: A validator failed to construct
                or initialize.
            MetadataAccessError: A marker's message accessors failed.
        """
        started = time.perf_counter()
        definitions: list[ValidationDefinition] = []

        for field in self._provider.fields(model_type):
            # Fields without a column are not persisted, so never validated.
            storage_name = field.storage_name
            if storage_name is None:
                continue
            for marker in self._provider.markers(field):
                candidates = constraint_validators(marker)
                if candidates is None:
                    continue
                definitions.append(
                    self._build_definition(field, storage_name, marker, candidates)
                )

        plan = ValidationPlan(model_type=model_type, definitions=tuple(definitions))
        logger.debug(
            "Built validation plan for %s: %d definitions in %.2f ms",
            model_type.__qualname__,
            len(plan),
            (time.perf_counter() - started) * 1000,
        )
        return plan

    def _build_definition(
        self,
        field: FieldDescriptor,
        storage_name: str,
        marker: object,
        candidates: tuple[type[ConstraintValidator[Any]], ...],
    ) -> ValidationDefinition:
        validator_cls = resolve_validator(candidates, field.value_type)
        if validator_cls is None:
            raise UnresolvedValidatorError(
                constraint_name(marker), field.value_type, field.name
            )

        try:
            validator = validator_cls()
            validator.initialize(marker)
        except Exception as exc:
            raise ValidatorInitializationError(
                f"{validator_cls.__module__}.{validator_cls.__qualname__}", field.name
            ) from exc

        raw_res_id = _read_accessor(marker, MESSAGE_RES_ACCESSOR)
        message_res_id = 0
        if isinstance(raw_res_id, numbers.Real) and not isinstance(raw_res_id, bool):
            message_res_id = int(raw_res_id)

        raw_message = _read_accessor(marker, MESSAGE_ACCESSOR)
        message = "" if raw_message is None else str(raw_message)

        return ValidationDefinition(
            field_name=field.name,
            storage_name=storage_name,
            validator=validator,
            message=message,
            message_res_id=message_res_id,
        )


def _read_accessor(marker: object, name: str) -> Any:
    """Read accessor *name* from *marker*, calling it if it is a method."""
    try:
        value = getattr(marker, name)
        if callable(value):
            value = value()
    except Exception as exc:
        raise MetadataAccessError(constraint_name(marker), name) from exc
    return value
