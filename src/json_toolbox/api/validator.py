"""
JSON validation and formatting helpers.
Parses raw text into a JSON value and reports structured error locations.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

logger = logging.getLogger(__name__)


HIDDEN_CHARS = {
    0x200B: "Zero Width Space",
    0x200C: "Zero Width Non-Joiner",
    0x200D: "Zero Width Joiner",
    0xFEFF: "BOM",
    0x00A0: "Non-Breaking Space",
    0x2028: "Line Separator",
    0x2029: "Paragraph Separator",
    0x202F: "Narrow No-Break Space",
    0x2060: "Word Joiner",
}


@dataclass
class ValidationResult:
    """Result of parsing a JSON document."""

    valid: bool
    parsed: Any = None
    error: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None
    error_line: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API responses."""
        if self.valid:
            return {'valid': True, 'parsed': self.parsed}

        result = {'valid': False, 'error': self.error}
        if self.line is not None:
            result['line'] = self.line
        if self.column is not None:
            result['column'] = self.column
        if self.error_line is not None:
            result['errorLine'] = self.error_line
        return result


def _reject_constant(name: str):
    # json accepts NaN and Infinity unless told otherwise
    raise ValueError(f"Invalid JSON literal: {name}")


def validate_json(text: str) -> ValidationResult:
    """
    Parse text as strict JSON.

    Args:
        text: Raw JSON text

    Returns:
        ValidationResult holding either the parsed value or the error message
        with a 1-based line/column and the offending source line
    """
    if not text.strip():
        return ValidationResult(valid=False, error="Empty input")

    try:
        parsed = json.loads(text, parse_constant=_reject_constant)
        return ValidationResult(valid=True, parsed=parsed)
    except json.JSONDecodeError as e:
        lines = text.split("\n")
        error_line = lines[e.lineno - 1] if e.lineno <= len(lines) else None
        logger.debug("JSON parse failed at line %d column %d: %s", e.lineno, e.colno, e.msg)
        return ValidationResult(
            valid=False,
            error=str(e),
            line=e.lineno,
            column=e.colno,
            error_line=error_line
        )
    except ValueError as e:
        return ValidationResult(valid=False, error=str(e))
    except RecursionError:
        return ValidationResult(valid=False, error="Maximum nesting depth exceeded")


def detect_hidden_chars(text: str) -> List[Dict[str, Any]]:
    """Find invisible or look-alike whitespace characters in text."""
    return [
        {'index': index, 'char': char, 'name': HIDDEN_CHARS[ord(char)]}
        for index, char in enumerate(text)
        if ord(char) in HIDDEN_CHARS
    ]


def format_json(value: Any, indent: Union[int, str] = 2) -> str:
    """Pretty print a JSON value. indent is a number of spaces or 'tab'."""
    if indent == 'tab':
        indent = '\t'
    return json.dumps(value, indent=indent, ensure_ascii=False)


def minify_json(value: Any) -> str:
    """Render a JSON value without any whitespace."""
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)
