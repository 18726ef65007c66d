"""Constraint markers and the constraint-kind registry hook.

A constraint marker is any object whose class was decorated with
:func:`constraint`. The decorator records the ordered candidate validator
classes on the marker class, the same way pluggy's ``HookimplMarker``
stamps an attribute on decorated callables. Objects without that stamp are
not constraints and are ignored by the plan builder.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel

from modelguard.domain.validators import ConstraintValidator

VALIDATORS_ATTR = "__constraint_validators__"


def constraint[C: type](
    *validators: type[ConstraintValidator[Any]],
) -> Callable[[C], C]:
    """Mark a class as a constraint kind validated by *validators*.

    Candidates are tried in the given order during resolution; the first
    one whose accepted type fits the field wins.

    Raises:
        TypeError: If no candidate is given or a candidate is not a
            :class:`ConstraintValidator` subclass.
    """
    if not validators:
        msg = "constraint() needs at least one validator class"
        raise TypeError(msg)
    for candidate in validators:
        if not (inspect.isclass(candidate) and issubclass(candidate, ConstraintValidator)):
            msg = f"{candidate!r} is not a ConstraintValidator subclass"
            raise TypeError(msg)

    def decorate(cls: C) -> C:
        setattr(cls, VALIDATORS_ATTR, tuple(validators))
        return cls

    return decorate


def constraint_validators(
    marker: object,
) -> tuple[type[ConstraintValidator[Any]], ...] | None:
    """Return the ordered candidate validators for *marker*, or None.

    None means *marker* is not a constraint marker at all.
    """
    return getattr(type(marker), VALIDATORS_ATTR, None)


def constraint_name(marker: object) -> str:
    """Qualified constraint kind name, for diagnostics."""
    cls = marker if inspect.isclass(marker) else type(marker)
    return f"{cls.__module__}.{cls.__qualname__}"


class Constraint(BaseModel):
    """Convenience base for constraint markers.

    Carries the two accessors every marker must expose. Subclasses add
    their own parameters and are decorated with :func:`constraint`::

        @constraint(MaxLengthValidator)
        class MaxLength(Constraint):
            limit: int
    """

    model_config = {"frozen": True}

    message: str = ""
    message_res_id: int = 0
