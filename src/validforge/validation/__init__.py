"""ValidForge validation engine.

Usage:
    from validforge.validation import Validator, validate

    result = validate(instance)
    result.is_valid   # True iff result.errors is empty
    result.errors     # messages in declaration order
"""

from validforge.validation.evaluator import evaluate, is_empty
from validforge.validation.types import (
    PASS,
    ConstraintViolation,
    Outcome,
    ValidationResult,
)
from validforge.validation.validator import Validator, validate

__all__ = [
    # Types
    "ConstraintViolation",
    "Outcome",
    "PASS",
    "ValidationResult",
    # Evaluation
    "evaluate",
    "is_empty",
    # Orchestration
    "Validator",
    "validate",
]
