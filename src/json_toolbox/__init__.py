"""
JSON toolbox: validation, JSONPath queries, line diffs and CSV/YAML
conversion for JSON documents.
"""

from .api.validator import validate_json, detect_hidden_chars, format_json, minify_json
from .api.path_query import query_json_path, tokenize_path, generate_path_examples
from .api.diff import compute_diff, compute_json_diff
from .api.converter import json_to_csv, json_to_yaml, yaml_to_json

__version__ = "2.0.0"

__all__ = [
    'validate_json',
    'detect_hidden_chars',
    'format_json',
    'minify_json',
    'query_json_path',
    'tokenize_path',
    'generate_path_examples',
    'compute_diff',
    'compute_json_diff',
    'json_to_csv',
    'json_to_yaml',
    'yaml_to_json',
]
