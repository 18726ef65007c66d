"""modelguard — field-level validation plans for SQLAlchemy models.

Resolves, once per model class, which validators run against which
columns before an instance is saved::

    from modelguard import NotNull, get_validations_for_model

    class User(Base):
        __tablename__ = "users"
        id: Mapped[int] = mapped_column(primary_key=True)
        name: Mapped[str] = mapped_column(info={"constraints": [NotNull(message="required")]})

    get_validations_for_model(User)
"""

from modelguard.domain.constraints import Constraint, constraint
from modelguard.domain.definitions import ValidationDefinition, ValidationPlan, Violation
from modelguard.domain.errors import (
    MetadataAccessError,
    ModelValidationError,
    UnresolvedValidatorError,
    ValidationConfigError,
    ValidatorInitializationError,
)
from modelguard.domain.metadata import FieldDescriptor, MetadataProvider
from modelguard.domain.rules import NotNull, NotNullValidator
from modelguard.domain.validators import ConstraintValidator
from modelguard.infrastructure.metadata import SQLAlchemyMetadataProvider
from modelguard.infrastructure.save_guard import install_save_guard
from modelguard.services.checker import ValidationReport, check_instance
from modelguard.services.plan_builder import ValidationPlanBuilder
from modelguard.services.plan_cache import (
    ValidationPlanCache,
    get_default_cache,
    get_validations_for_model,
)

__all__ = [
    "Constraint",
    "ConstraintValidator",
    "FieldDescriptor",
    "MetadataAccessError",
    "MetadataProvider",
    "ModelValidationError",
    "NotNull",
    "NotNullValidator",
    "SQLAlchemyMetadataProvider",
    "UnresolvedValidatorError",
    "ValidationConfigError",
    "ValidationDefinition",
    "ValidationPlan",
    "ValidationPlanBuilder",
    "ValidationPlanCache",
    "ValidationReport",
    "ValidatorInitializationError",
    "Violation",
    "check_instance",
    "constraint",
    "get_default_cache",
    "get_validations_for_model",
    "install_save_guard",
]
