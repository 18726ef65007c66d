"""Built-in constraint rules."""

from __future__ import annotations

from typing import Any

from modelguard.domain.constraints import Constraint, constraint
from modelguard.domain.validators import ConstraintValidator


class NotNullValidator(ConstraintValidator[object]):
    """Fails when the value is None. Accepts any field type."""

    @classmethod
    def accepted_type(cls) -> type:
        return object

    def validate(self, value: Any) -> bool:
        return value is not None


@constraint(NotNullValidator)
class NotNull(Constraint):
    """Simple not-null check."""
