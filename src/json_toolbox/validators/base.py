"""
Base validator interface and common validation types.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional
from dataclasses import dataclass


@dataclass
class ValidationResult:
    """Result of a validation operation."""

    is_valid: bool
    errors: List[str]
    warnings: List[str]
    details: Optional[Dict[str, Any]] = None

    def add_error(self, message: str) -> None:
        """Add an error message."""
        self.errors.append(message)
        self.is_valid = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        return {
            'valid': self.is_valid,
            'errors': self.errors,
            'warnings': self.warnings,
            'details': self.details or {}
        }


class ValidationError(Exception):
    """Exception raised when validation configuration is invalid."""
    pass


class BaseValidator(ABC):
    """
    Base class for document validators.

    A validator checks parsed JSON values against one schema.
    """

    def __init__(self, validator_id: str, name: str, schema_content: str, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the validator.

        Args:
            validator_id: Unique identifier for this validator instance
            name: Human-readable name for the validator
            schema_content: The schema document as text
            config: Additional configuration options

        Raises:
            ValidationError: If the schema cannot be parsed
        """
        self.validator_id = validator_id
        self.name = name
        self.schema_content = schema_content
        self.config = config or {}
        self._schema = None
        self._initialize_schema()

    @abstractmethod
    def _initialize_schema(self) -> None:
        """Parse and prepare the schema."""
        pass

    @abstractmethod
    def validate_data(self, data: Any) -> ValidationResult:
        """
        Validate data against the schema.

        Args:
            data: Parsed JSON value

        Returns:
            ValidationResult with validation outcome
        """
        pass
