"""Validator resolution — match a field's type to one candidate validator.

Storage column types play the role of primitives: ``Integer`` on the
column and ``int`` on the validator describe the same value type. Both
sides are normalised through :func:`boxed_type` before the subclass
check, so the equivalence holds in either direction.
"""

from __future__ import annotations

import inspect
import logging
import types
from collections.abc import Sequence
from typing import Any, Union, get_args, get_origin

from sqlalchemy.types import (
    Boolean,
    Enum,
    Float,
    Integer,
    LargeBinary,
    Numeric,
    String,
    TypeEngine,
)

from modelguard.domain.validators import ConstraintValidator

logger = logging.getLogger(__name__)

# Order matters only for readability; the storage types are disjoint.
# Python keeps bool a subclass of int, so an int validator accepts Boolean.
BOXED_TYPES: dict[type[TypeEngine[Any]], type] = {
    Boolean: bool,
    Integer: int,
    Float: float,
    String: str,
    LargeBinary: bytes,
}


def boxed_type(declared: Any) -> Any:
    """Return the canonical value type for *declared*.

    Examples:
        >>> boxed_type(Integer())
        <class 'int'>
        >>> boxed_type(int)
        <class 'int'>
        >>> boxed_type(list[str])
        <class 'list'>
    """
    engine_cls: type[TypeEngine[Any]] | None = None
    if isinstance(declared, TypeEngine):
        engine_cls = type(declared)
    elif inspect.isclass(declared) and issubclass(declared, TypeEngine):
        engine_cls = declared

    if engine_cls is None:
        origin = get_origin(declared)
        if origin is Union or origin is types.UnionType:
            # Optional[X] is X; real unions stay as declared.
            members = [arg for arg in get_args(declared) if arg is not type(None)]
            return boxed_type(members[0]) if len(members) == 1 else declared
        if inspect.isclass(origin):
            return origin
        return declared

    # Enum subclasses String and Float subclasses Numeric, but both can load
    # something else (the enum class, Decimal); trust the configured instance.
    if isinstance(declared, Enum) or (
        isinstance(declared, Numeric) and declared.asdecimal
    ):
        return declared.python_type

    for storage_type, value_type in BOXED_TYPES.items():
        if issubclass(engine_cls, storage_type):
            return value_type

    # Other storage types: use the Python type they load as, when known.
    try:
        instance = declared if isinstance(declared, TypeEngine) else engine_cls()
        return instance.python_type
    except (NotImplementedError, TypeError):
        return engine_cls


def accepts(accepted: Any, field_type: Any) -> bool:
    """True if *accepted* is the same as, or a supertype of, *field_type*."""
    accepted = boxed_type(accepted)
    field_type = boxed_type(field_type)
    if accepted is field_type:
        return True
    if inspect.isclass(accepted) and inspect.isclass(field_type):
        return issubclass(field_type, accepted)
    return accepted is object


def resolve_validator(
    candidates: Sequence[type[ConstraintValidator[Any]]],
    field_type: Any,
) -> type[ConstraintValidator[Any]] | None:
    """Pick the first candidate whose accepted type fits *field_type*.

    Returns None when no candidate matches; the caller decides how fatal
    that is.
    """
    for candidate in candidates:
        if accepts(candidate.accepted_type(), field_type):
            return candidate
        logger.debug(
            "Validator %s does not accept %r",
            candidate.__qualname__,
            field_type,
        )
    return None
