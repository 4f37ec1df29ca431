import logging

from flask import Blueprint, request, jsonify

from ..api.converter import convert_json, yaml_to_json, SUPPORTED_FORMATS
from . import tool_disabled_response

logger = logging.getLogger(__name__)

converter_bp = Blueprint('converter', __name__)

TOOL_ID = 'json-converter'


@converter_bp.route('/api/json/convert', methods=['POST'])
def api_convert():
    """Convert JSON to CSV or YAML, or YAML back to JSON"""
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        input_format = data.get('input_format', 'json')
        output_format = data.get('output_format', '')

        if not isinstance(input_data, str) or not input_data.strip():
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        if not output_format:
            return jsonify({'success': False, 'error': 'Output format is required'}), 400

        if input_format == 'yaml' and output_format == 'json':
            result = yaml_to_json(input_data).to_dict()
            result['format'] = 'json'
        elif input_format == 'json':
            result = convert_json(input_data, output_format)
        else:
            return jsonify({
                'success': False,
                'error': f'Conversion from {input_format} to {output_format} not supported. '
                         f'JSON converts to {SUPPORTED_FORMATS}, YAML converts to json'
            }), 400

        if result['success']:
            return jsonify(result)
        else:
            return jsonify(result), 400

    except Exception as e:
        logger.exception("Conversion failed")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
