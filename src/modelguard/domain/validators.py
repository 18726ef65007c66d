"""ConstraintValidator — the contract every validator implementation meets.

Concrete validators live outside the resolution engine. The engine only
asks a validator class which value type it accepts, constructs it with no
arguments, and hands it the constraint marker to read its parameters from.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class ConstraintValidator[T](ABC):
    """Abstract base for validators bound to one field and one constraint.

    Subclasses declare their accepted value type explicitly::

        class PositiveValidator(ConstraintValidator[int]):
            @classmethod
            def accepted_type(cls) -> type:
                return int

            def validate(self, value: int | None) -> bool:
                return value is None or value > 0

    Instances are stateless after :meth:`initialize` and are treated as
    read-only once stored in a validation plan.
    """

    @classmethod
    @abstractmethod
    def accepted_type(cls) -> type:
        """Value type this validator can check (e.g. ``int``, ``str``)."""
        ...

    def initialize(self, marker: Any) -> None:  # noqa: B027
        """Read constraint parameters from *marker*. No-op by default."""

    @abstractmethod
    def validate(self, value: T | None) -> bool:
        """Return True if *value* satisfies the constraint."""
        ...
