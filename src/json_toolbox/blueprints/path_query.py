import logging

from flask import Blueprint, request, jsonify

from ..api.validator import validate_json
from ..api.path_query import query_json_path, generate_path_examples
from . import tool_disabled_response

logger = logging.getLogger(__name__)

path_query_bp = Blueprint('path_query', __name__)

TOOL_ID = 'json-path-query'


def _parse_document(data):
    """Return (parsed, error_response) for the 'data' field of a request body."""
    input_data = data.get('data', '')
    if not isinstance(input_data, str) or not input_data.strip():
        return None, (jsonify({'success': False, 'error': 'No input data provided'}), 400)

    validation = validate_json(input_data)
    if not validation.valid:
        return None, (jsonify({'success': False, 'error': 'No valid JSON to query',
                               'details': validation.error}), 400)
    return validation.parsed, None


@path_query_bp.route('/api/json/query', methods=['POST'])
def api_query():
    """Evaluate a JSONPath expression against a JSON document"""
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        path = data.get('path', '$')
        if not isinstance(path, str):
            return jsonify({'success': False, 'error': 'Path must be a string'}), 400

        document, error_response = _parse_document(data)
        if error_response:
            return error_response

        result = query_json_path(document, path)
        if not result.found:
            return jsonify(result.to_dict()), 400

        response = result.to_dict()
        response['path'] = path
        return jsonify(response)

    except Exception as e:
        logger.exception("Path query failed")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500


@path_query_bp.route('/api/json/paths', methods=['POST'])
def api_paths():
    """Suggest example paths for a JSON document"""
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        document, error_response = _parse_document(data)
        if error_response:
            return error_response

        return jsonify({'success': True, 'paths': generate_path_examples(document)})

    except Exception as e:
        logger.exception("Path suggestion failed")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
