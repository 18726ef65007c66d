"""Save guard — run validation plans from SQLAlchemy mapper events.

``before_insert`` and ``before_update`` listeners check the instance
against its cached plan and abort the flush with
:class:`~modelguard.domain.errors.ModelValidationError` on any violation.

INVARIANT: At most one guard applies to any class. Listeners propagate to
subclasses, so guarding a class whose ancestor is guarded is a no-op, and
guarding an ancestor replaces the guards already on its subclasses.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

from sqlalchemy import event

from modelguard.domain.errors import ModelValidationError
from modelguard.services.checker import check_instance
from modelguard.services.plan_cache import ValidationPlanCache

logger = logging.getLogger(__name__)

_SAVE_EVENTS = ("before_insert", "before_update")

_guarded: dict[type, Callable[..., None]] = {}
_guarded_lock = threading.Lock()


def install_save_guard(
    model_type: type,
    cache: ValidationPlanCache | None = None,
) -> bool:
    """Validate *model_type* (and its subclasses) before every insert/update.

    Returns False if *model_type* or one of its ancestors is already guarded.
    """
    with _guarded_lock:
        if _guarding_ancestor(model_type) is not None:
            return False

        for guarded_type in [t for t in _guarded if issubclass(t, model_type)]:
            _remove_listeners(guarded_type, _guarded.pop(guarded_type))
            logger.debug(
                "Save guard on %s replaced by %s",
                guarded_type.__qualname__,
                model_type.__qualname__,
            )

        def _check_before_save(_mapper: Any, _connection: Any, target: object) -> None:
            report = check_instance(target, cache)
            if not report.valid:
                raise ModelValidationError(type(target), report.violations)

        for identifier in _SAVE_EVENTS:
            event.listen(model_type, identifier, _check_before_save, propagate=True)
        _guarded[model_type] = _check_before_save

    logger.debug("Installed save guard on %s", model_type.__qualname__)
    return True


def is_guarded(model_type: type) -> bool:
    """Whether *model_type* is covered by a guard on itself or an ancestor."""
    return _guarding_ancestor(model_type) is not None


def _guarding_ancestor(model_type: type) -> type | None:
    for cls in model_type.__mro__:
        if cls in _guarded:
            return cls
    return None


def _remove_listeners(model_type: type, listener: Callable[..., None]) -> None:
    for identifier in _SAVE_EVENTS:
        event.remove(model_type, identifier, listener)
