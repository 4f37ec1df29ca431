"""
Schema validation for JSON documents.
"""

from .base import BaseValidator, ValidationResult, ValidationError
from .json_schema import JsonSchemaValidator, validate_json_schema

__all__ = [
    'BaseValidator',
    'ValidationResult',
    'ValidationError',
    'JsonSchemaValidator',
    'validate_json_schema'
]
