"""Property binding engine.

Pipeline: property map -> :func:`bind` (descriptor registry + coercion)
-> bound instance -> :func:`validate` -> ready configuration or rejection.
"""

from propbind.binding.binder import BindResult, bind, load_config
from propbind.binding.coercion import CoercionFailure, coerce
from propbind.binding.descriptors import REQUIRED, BindingDescriptor, ValueType, describe
from propbind.binding.errors import (
    BindingError,
    BindingProblem,
    CoercionError,
    ConfigurationError,
    MissingRequiredProperty,
    RegistrationError,
    UnknownProperty,
    ValidationConstraintViolation,
    ValidationViolation,
)
from propbind.binding.model import (
    REDACTED,
    ConfigBuilder,
    ConfigModel,
    NotNull,
    Property,
    Sensitive,
)
from propbind.binding.redaction import render
from propbind.binding.validation import (
    ConstraintScope,
    ValidationConstraint,
    constraint,
    constraints,
    validate,
)

__all__ = [
    "REDACTED",
    "REQUIRED",
    "BindResult",
    "BindingDescriptor",
    "BindingError",
    "BindingProblem",
    "CoercionError",
    "CoercionFailure",
    "ConfigBuilder",
    "ConfigModel",
    "ConfigurationError",
    "ConstraintScope",
    "MissingRequiredProperty",
    "NotNull",
    "Property",
    "RegistrationError",
    "Sensitive",
    "UnknownProperty",
    "ValidationConstraint",
    "ValidationConstraintViolation",
    "ValidationViolation",
    "ValueType",
    "bind",
    "coerce",
    "constraint",
    "constraints",
    "describe",
    "load_config",
    "render",
    "validate",
]
