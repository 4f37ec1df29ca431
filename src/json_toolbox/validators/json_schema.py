"""
JSON Schema validator implementation.
"""

import json
import logging
from typing import Any, Dict, Optional

import jsonschema

from .base import BaseValidator, ValidationResult, ValidationError

logger = logging.getLogger(__name__)


def _instance_pointer(error: jsonschema.ValidationError) -> str:
    """JSON pointer of the failing instance, '/' for the document root."""
    if not error.absolute_path:
        return "/"
    return "/" + "/".join(str(part) for part in error.absolute_path)


class JsonSchemaValidator(BaseValidator):
    """
    Validator for JSON Schema validation.

    Validates JSON data against Draft 7 JSON Schema documents.
    """

    def _initialize_schema(self) -> None:
        """Initialize the JSON schema."""
        try:
            self._schema = json.loads(self.schema_content)
            # Validate that the schema itself is valid
            jsonschema.Draft7Validator.check_schema(self._schema)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in schema: {str(e)}")
        except jsonschema.SchemaError as e:
            raise ValidationError(f"Invalid JSON Schema: {e.message}")

    def validate_data(self, data: Any) -> ValidationResult:
        """
        Validate data against the JSON schema.

        Args:
            data: The data to validate (dict, list, string, etc.)

        Returns:
            ValidationResult with one error per schema violation
        """
        result = ValidationResult(is_valid=True, errors=[], warnings=[])

        validator = jsonschema.Draft7Validator(
            self._schema,
            format_checker=jsonschema.FormatChecker() if self.config.get('check_formats', True) else None
        )

        # Collect all validation errors
        errors = sorted(validator.iter_errors(data), key=_instance_pointer)
        for error in errors:
            result.add_error(f"{_instance_pointer(error)}: {error.message}")

        result.details = {
            'schema_version': self._schema.get('$schema', 'unknown') if isinstance(self._schema, dict) else 'unknown',
            'error_count': len(errors),
            'validated_against': self.name
        }
        return result


def validate_json_schema(data: Any, schema: Any, config: Optional[Dict[str, Any]] = None) -> ValidationResult:
    """
    Validate a parsed document against a parsed schema.

    An unusable schema is reported as a failed result rather than raised.
    """
    try:
        validator = JsonSchemaValidator(
            validator_id='inline',
            name='Inline schema',
            schema_content=json.dumps(schema),
            config=config
        )
    except ValidationError as e:
        logger.debug("Rejected schema: %s", e)
        result = ValidationResult(is_valid=False, errors=[], warnings=[])
        result.add_error(str(e))
        return result

    return validator.validate_data(data)
