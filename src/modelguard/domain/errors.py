"""Error taxonomy for plan construction and save-time validation.

Configuration errors are fatal: they abort the plan build and nothing is
cached, so a corrected model can be retried. Each error carries a stable
``code`` and a structured ``detail`` dict, matching the code/message/detail
shape used by service error payloads.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, ClassVar

if TYPE_CHECKING:
    from modelguard.domain.definitions import Violation


class ValidationConfigError(Exception):
    """Base class for fatal validation-configuration errors."""

    code: ClassVar[str] = "VALIDATION_CONFIG"

    @property
    def detail(self) -> dict[str, Any]:
        return {}


class UnresolvedValidatorError(ValidationConfigError):
    """No candidate validator accepts the field's declared type."""

    code: ClassVar[str] = "UNRESOLVED_VALIDATOR"

    def __init__(self, constraint: str, field_type: Any, field_name: str) -> None:
        self.constraint = constraint
        self.field_type = field_type
        self.field_name = field_name
        super().__init__(
            f"Constraint {constraint} does not validate type {field_type!r} "
            f"(field '{field_name}')"
        )

    @property
    def detail(self) -> dict[str, Any]:
        return {
            "constraint": self.constraint,
            "field_type": repr(self.field_type),
            "field_name": self.field_name,
        }


class ValidatorInitializationError(ValidationConfigError):
    """Constructing or initializing a validator raised."""

    code: ClassVar[str] = "VALIDATOR_INIT_FAILED"

    def __init__(self, validator_type: str, field_name: str) -> None:
        self.validator_type = validator_type
        self.field_name = field_name
        super().__init__(
            f"Failed to instantiate validator {validator_type} for field '{field_name}'"
        )

    @property
    def detail(self) -> dict[str, Any]:
        return {"validator_type": self.validator_type, "field_name": self.field_name}


class MetadataAccessError(ValidationConfigError):
    """A marker does not properly expose ``message`` / ``message_res_id``."""

    code: ClassVar[str] = "METADATA_ACCESS_FAILED"

    def __init__(self, marker_type: str, accessor: str) -> None:
        self.marker_type = marker_type
        self.accessor = accessor
        super().__init__(
            f"Constraint {marker_type} must define message and message_res_id "
            f"(failed reading '{accessor}')"
        )

    @property
    def detail(self) -> dict[str, Any]:
        return {"marker_type": self.marker_type, "accessor": self.accessor}


class ModelValidationError(Exception):
    """A model instance failed its validation plan before save."""

    code: ClassVar[str] = "MODEL_INVALID"

    def __init__(self, model_type: type, violations: Sequence[Violation]) -> None:
        self.model_type = model_type
        self.violations = list(violations)
        fields = ", ".join(v.field_name for v in self.violations)
        super().__init__(f"{model_type.__name__} failed validation: {fields}")

    @property
    def detail(self) -> dict[str, Any]:
        return {
            "model": self.model_type.__name__,
            "violations": [v.to_dict() for v in self.violations],
        }
