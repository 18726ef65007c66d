"""ValidationPlanCache — compute-once, reuse-forever plans per model type.

Models are scanned lazily on first request rather than up front; the ORM
already walks every mapped class at startup and a second walk would only
slow it down.

INVARIANT: At most one plan is built and stored per model type for the
process lifetime. Failed builds are not remembered, so the next request
retries from scratch.
"""

from __future__ import annotations

import logging
import threading

from modelguard.domain.definitions import ValidationDefinition, ValidationPlan
from modelguard.services.plan_builder import ValidationPlanBuilder

logger = logging.getLogger(__name__)


class ValidationPlanCache:
    """Process-wide plan store keyed by model type identity.

    Hits read the plan dict without locking. A miss takes a per-type lock,
    so two threads asking for the same new type build it once, while
    builds for unrelated types proceed in parallel. The global guard is
    held only long enough to fetch or create the per-type lock.
    """

    def __init__(self, builder: ValidationPlanBuilder) -> None:
        self._builder = builder
        self._plans: dict[type, ValidationPlan] = {}
        self._build_locks: dict[type, threading.Lock] = {}
        self._guard = threading.Lock()

    @property
    def builder(self) -> ValidationPlanBuilder:
        return self._builder

    def get_plan(self, model_type: type) -> ValidationPlan:
        """Return the plan for *model_type*, building it on first request."""
        plan = self._plans.get(model_type)
        if plan is not None:
            return plan

        with self._guard:
            build_lock = self._build_locks.setdefault(model_type, threading.Lock())

        with build_lock:
            plan = self._plans.get(model_type)
            if plan is None:
                logger.debug("Validation plan cache miss: %s", model_type.__qualname__)
                plan = self._builder.build_plan(model_type)
                self._plans[model_type] = plan
        return plan

    def __contains__(self, model_type: object) -> bool:
        return model_type in self._plans

    def __len__(self) -> int:
        return len(self._plans)


# ---------------------------------------------------------------------------
# Process-wide default cache
# ---------------------------------------------------------------------------

_default_cache: ValidationPlanCache | None = None
_default_lock = threading.Lock()


def get_default_cache() -> ValidationPlanCache:
    """Return the process-wide cache, creating it from settings on first use."""
    global _default_cache
    if _default_cache is None:
        with _default_lock:
            if _default_cache is None:
                from modelguard.config.settings import ModelguardSettings
                from modelguard.infrastructure.metadata import SQLAlchemyMetadataProvider

                settings = ModelguardSettings.load()
                provider = SQLAlchemyMetadataProvider(info_key=settings.metadata.info_key)
                _default_cache = ValidationPlanCache(ValidationPlanBuilder(provider))
    return _default_cache


def get_validations_for_model(model_type: type) -> tuple[ValidationDefinition, ...]:
    """Ordered validation definitions for *model_type*.

    Safe to call repeatedly and from multiple threads; after the first
    successful build the same definition objects are returned every time.
    """
    return get_default_cache().get_plan(model_type).definitions
