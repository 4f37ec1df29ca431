import logging

from flask import Blueprint, request, jsonify

from ..api.validator import validate_json
from ..validators import validate_json_schema
from . import tool_disabled_response

logger = logging.getLogger(__name__)

schema_bp = Blueprint('schema', __name__)

TOOL_ID = 'json-schema'


@schema_bp.route('/api/json/schema', methods=['POST'])
def api_schema():
    """Validate a JSON document against a JSON Schema"""
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        document_text = data.get('data', '')
        schema_text = data.get('schema', '')
        if not isinstance(document_text, str) or not isinstance(schema_text, str):
            return jsonify({'success': False, 'error': 'data and schema must be strings'}), 400

        document = validate_json(document_text)
        if not document.valid:
            return jsonify({'success': False, 'error': f'Invalid JSON: {document.error}'}), 400

        schema = validate_json(schema_text)
        if not schema.valid:
            return jsonify({'success': False, 'error': f'Invalid schema JSON: {schema.error}'}), 400

        response = validate_json_schema(document.parsed, schema.parsed).to_dict()
        response['success'] = True
        return jsonify(response)

    except Exception as e:
        logger.exception("Schema validation failed")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
