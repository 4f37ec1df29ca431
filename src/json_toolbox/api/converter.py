"""
JSON to CSV / YAML converters.
Renders an already parsed JSON value into a target text format.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import yaml

from .validator import validate_json, format_json

logger = logging.getLogger(__name__)


# Create a custom YAML loader that doesn't auto-convert dates to date objects
class StringLoader(yaml.SafeLoader):
    """Custom YAML loader that treats dates as strings."""
    pass

# Remove the implicit timestamp resolver so dates stay as strings
StringLoader.yaml_implicit_resolvers = {
    key: [resolver for resolver in resolvers if resolver[0] != 'tag:yaml.org,2002:timestamp']
    for key, resolvers in StringLoader.yaml_implicit_resolvers.items()
}


SUPPORTED_FORMATS = ['csv', 'yaml']

_YAML_SPECIAL_RE = re.compile(r'[:{}\[\],&*?|<>=!%@`#\'"]')


@dataclass
class ConversionResult:
    """Result of a conversion; exactly one of result/error is set."""

    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        if self.error is not None:
            return {'success': False, 'error': self.error}
        return {'success': True, 'result': self.result}


def _number_text(value) -> str:
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def to_text(value: Any) -> str:
    """Render a JSON value the way it reads in JSON text (true, null, 1.5)."""
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return _number_text(value)
    if isinstance(value, str):
        return value
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


def _csv_cell(value: Any) -> str:
    text = '' if value is None else to_text(value)
    if ',' in text or '"' in text or '\n' in text:
        return '"' + text.replace('"', '""') + '"'
    return text


def json_to_csv(data: Any) -> ConversionResult:
    """
    Convert an object or a list of objects to CSV.

    The header is the union of keys across all rows in first-seen order;
    missing cells are left empty.
    """
    if isinstance(data, list):
        if not data:
            return ConversionResult(error="Empty array — nothing to convert")
        if not all(isinstance(row, dict) for row in data):
            return ConversionResult(error="CSV requires an array of objects")
        rows = data
    elif isinstance(data, dict):
        rows = [data]
    else:
        return ConversionResult(error="CSV requires an object or array of objects")

    columns: Dict[str, None] = {}
    for row in rows:
        for key in row:
            columns.setdefault(key, None)

    lines = [','.join(_csv_cell(key) for key in columns)]
    for row in rows:
        lines.append(','.join(_csv_cell(row.get(key)) for key in columns))
    return ConversionResult(result='\n'.join(lines))


def _block_string(text: str, pad: str) -> str:
    indicator = '|'
    if text.lstrip('\n').startswith(' '):
        # an indented first line would be taken as the block's indentation
        indicator += '2'
    if not text.endswith('\n'):
        indicator += '-'
    body = '\n'.join(f"{pad}  {line}" for line in text.split('\n'))
    return f"{pad}{indicator}\n{body}"


def _yaml_string(text: str, pad: str) -> str:
    if '\n' in text:
        # block chomping keeps at most one final newline reliably
        if text.strip('\n') and not text.endswith('\n\n'):
            return _block_string(text, pad)
        return f"{pad}{json.dumps(text, ensure_ascii=False)}"
    if _YAML_SPECIAL_RE.search(text) or text.strip() != text or text == '':
        return f"{pad}{json.dumps(text, ensure_ascii=False)}"
    return f"{pad}{text}"


def _yaml_key(key: str) -> str:
    if '\n' in key:
        return json.dumps(key, ensure_ascii=False)
    return _yaml_string(key, '')


def _is_block(value: Any) -> bool:
    """Containers that render over several lines."""
    return isinstance(value, (dict, list)) and len(value) > 0


def json_to_yaml(data: Any, indent: int = 0) -> str:
    """
    Render a JSON value as YAML.

    Args:
        data: Parsed JSON value
        indent: Nesting level; each level is two spaces

    Returns:
        YAML text without a trailing newline
    """
    pad = '  ' * indent

    if data is None:
        return f"{pad}null"
    if isinstance(data, bool):
        return f"{pad}{'true' if data else 'false'}"
    if isinstance(data, (int, float)):
        return f"{pad}{_number_text(data)}"
    if isinstance(data, str):
        return _yaml_string(data, pad)

    if isinstance(data, list):
        if not data:
            return f"{pad}[]"
        items: List[str] = []
        for item in data:
            if _is_block(item):
                inner = json_to_yaml(item, indent + 1).lstrip()
            else:
                inner = json_to_yaml(item, indent).lstrip()
            items.append(f"{pad}- {inner}")
        return '\n'.join(items)

    if isinstance(data, dict):
        if not data:
            return f"{pad}{{}}"
        entries: List[str] = []
        for key, value in data.items():
            name = _yaml_key(str(key))
            if isinstance(value, list) and value:
                # sequences sit at the key's own indentation
                entries.append(f"{pad}{name}:\n{json_to_yaml(value, indent)}")
            elif isinstance(value, dict) and value:
                entries.append(f"{pad}{name}:\n{json_to_yaml(value, indent + 1)}")
            else:
                entries.append(f"{pad}{name}: {json_to_yaml(value, indent).lstrip()}")
        return '\n'.join(entries)

    return f"{pad}{data}"


def yaml_to_json(yaml_str: str) -> ConversionResult:
    """Convert YAML text to pretty printed JSON."""
    try:
        data = yaml.load(yaml_str, Loader=StringLoader)
        return ConversionResult(result=format_json(data))
    except (yaml.YAMLError, TypeError, ValueError) as e:
        return ConversionResult(error=f"YAML to JSON conversion failed: {str(e)}")


def convert_json(input_data: str, output_format: str) -> Dict[str, Any]:
    """
    Validate JSON text and convert it to another format.

    Args:
        input_data: Raw JSON text
        output_format: Target format ('csv', 'yaml')

    Returns:
        Dict with 'success', 'result' and 'format', or 'success' and 'error'
    """
    if output_format not in SUPPORTED_FORMATS:
        return {
            'success': False,
            'error': f'Invalid format. Supported: {SUPPORTED_FORMATS}'
        }

    validation = validate_json(input_data)
    if not validation.valid:
        response = validation.to_dict()
        response.pop('valid')
        response['success'] = False
        return response

    if output_format == 'csv':
        conversion = json_to_csv(validation.parsed)
    else:
        conversion = ConversionResult(result=json_to_yaml(validation.parsed))

    if not conversion.success:
        logger.debug("Conversion to %s rejected: %s", output_format, conversion.error)
        return conversion.to_dict()

    response = conversion.to_dict()
    response['format'] = output_format
    return response
