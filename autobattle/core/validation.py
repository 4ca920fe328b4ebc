"""
Input validation for requests coming from the UI collaborators.
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Type, Union

from .constants import EnemySpecies


class ValidationResult:
    """Outcome of a validation: a flag plus the collected error messages."""

    def __init__(self, is_valid: bool = True, errors: Optional[list[str]] = None):
        self.is_valid = is_valid
        self.errors = errors or []

    def add_error(self, error: str) -> None:
        self.is_valid = False
        self.errors.append(error)

    def merge(self, other: "ValidationResult") -> None:
        if not other.is_valid:
            self.is_valid = False
            self.errors.extend(other.errors)

    def __bool__(self) -> bool:
        return self.is_valid

    def __repr__(self) -> str:
        return f"ValidationResult(is_valid={self.is_valid}, errors={self.errors})"


@dataclass
class FieldValidator:
    """Defines validation rules for a field."""

    required: bool = False
    field_type: Optional[Union[Type, tuple[Type, ...]]] = None
    min_value: Optional[Union[int, float]] = None
    max_value: Optional[Union[int, float]] = None
    allowed_values: Optional[list[Any]] = None
    finite: bool = False


class DataValidator:
    """Validates data structures against defined schemas."""

    def __init__(self, schema: dict[str, FieldValidator]):
        self.schema = schema

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate data against the schema."""
        result = ValidationResult()

        for field_name, validator in self.schema.items():
            if field_name not in data or data[field_name] is None:
                if validator.required:
                    result.add_error(f"Required field '{field_name}' is missing")
                continue
            result.merge(self._validate_field(field_name, data[field_name], validator))

        return result

    def _validate_field(
        self, field_name: str, value: Any, validator: FieldValidator
    ) -> ValidationResult:
        """Validate a single field."""
        result = ValidationResult()

        # bool is an int subclass but never a valid number here.
        if isinstance(value, bool) or (
            validator.field_type and not isinstance(value, validator.field_type)
        ):
            result.add_error(f"Field '{field_name}' has invalid type {type(value).__name__}")
            return result

        if isinstance(value, (int, float)):
            if validator.finite and not math.isfinite(value):
                result.add_error(f"Field '{field_name}' must be a finite number")
                return result
            if validator.min_value is not None and value < validator.min_value:
                result.add_error(f"Field '{field_name}' must be >= {validator.min_value}")
            if validator.max_value is not None and value > validator.max_value:
                result.add_error(f"Field '{field_name}' must be <= {validator.max_value}")

        if validator.allowed_values and value not in validator.allowed_values:
            result.add_error(f"Field '{field_name}' must be one of: {validator.allowed_values}")

        return result


def loop_request_validator(min_battles: int, max_battles: int) -> DataValidator:
    """Schema for a battle-loop start request."""
    return DataValidator(
        {
            "num_battles": FieldValidator(
                required=True, field_type=int, min_value=min_battles, max_value=max_battles
            ),
            "tier_starting_level": FieldValidator(required=True, field_type=int),
            "stat_multiplier": FieldValidator(
                required=True, field_type=(int, float), min_value=0, finite=True
            ),
            "species": FieldValidator(required=True, field_type=EnemySpecies),
        }
    )
