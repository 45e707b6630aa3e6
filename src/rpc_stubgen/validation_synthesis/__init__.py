"""Validation synthesis exports."""

from .plan_evaluation import PlanEvaluationError, first_validation_failure
from .validation_steps import (
    REQUIRED_MESSAGE,
    DefaultSubstitution,
    EnumMembershipCheck,
    FieldValidation,
    NestedElementValidation,
    RequiredCheck,
    ValidationPlan,
    ValidationStep,
    format_element_error,
    format_enum_message,
    format_validation_error,
)
from .validation_synthesizer import (
    REQUIRED_CHECK_KINDS,
    synthesize_input_plan,
    synthesize_type_plans,
    synthesize_validation,
)

__all__ = [
    "REQUIRED_CHECK_KINDS",
    "REQUIRED_MESSAGE",
    "DefaultSubstitution",
    "EnumMembershipCheck",
    "FieldValidation",
    "NestedElementValidation",
    "PlanEvaluationError",
    "RequiredCheck",
    "ValidationPlan",
    "ValidationStep",
    "first_validation_failure",
    "format_element_error",
    "format_enum_message",
    "format_validation_error",
    "synthesize_input_plan",
    "synthesize_type_plans",
    "synthesize_validation",
]
