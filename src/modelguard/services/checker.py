"""Run a model type's cached validation plan against one instance."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from modelguard.domain.definitions import Violation
from modelguard.services.plan_cache import ValidationPlanCache, get_default_cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationReport:
    """Outcome of checking one model instance."""

    model_type: type
    violations: list[Violation] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.violations


def check_instance(
    instance: object,
    cache: ValidationPlanCache | None = None,
) -> ValidationReport:
    """Validate every field of *instance* covered by its model's plan.

    Each definition reads the field by attribute name and collects a
    :class:`Violation` when its validator returns False. All definitions
    run; the report lists every failure in plan order.
    """
    model_type = type(instance)
    plan = (cache if cache is not None else get_default_cache()).get_plan(model_type)

    violations: list[Violation] = []
    for definition in plan:
        value = getattr(instance, definition.field_name)
        if definition.validator.validate(value):
            continue
        violations.append(
            Violation(
                field_name=definition.field_name,
                storage_name=definition.storage_name,
                message=definition.message,
                message_res_id=definition.message_res_id,
            )
        )

    if violations:
        logger.debug(
            "%s failed %d of %d validations",
            model_type.__qualname__,
            len(violations),
            len(plan),
        )
    return ValidationReport(model_type=model_type, violations=violations)
