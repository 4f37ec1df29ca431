import logging

from flask import Blueprint, current_app, request, jsonify

from ..api.validator import validate_json, detect_hidden_chars, format_json, minify_json
from . import tool_disabled_response

logger = logging.getLogger(__name__)

formatter_bp = Blueprint('formatter', __name__)

TOOL_ID = 'json-formatter'


def _parse_indent(raw):
    if raw == 'tab':
        return 'tab'
    indent = int(raw)
    if indent < 0:
        raise ValueError('Indent must not be negative')
    return indent


@formatter_bp.route('/api/json/validate', methods=['POST'])
def api_validate():
    """Validate JSON text and report error position and hidden characters"""
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'valid': False, 'error': 'No data provided'}), 400

        input_data = data.get('data')
        if not isinstance(input_data, str):
            return jsonify({'valid': False, 'error': 'No input data provided'}), 400

        result = validate_json(input_data).to_dict()
        result['hiddenChars'] = detect_hidden_chars(input_data)
        return jsonify(result)

    except Exception as e:
        logger.exception("JSON validation failed")
        return jsonify({'valid': False, 'error': f'Server error: {str(e)}'}), 500


@formatter_bp.route('/api/json/format', methods=['POST'])
def api_format():
    """Pretty print or minify JSON text

    Options:
    - indent: number of spaces or 'tab' (default from config, 2)
    - mode: 'pretty' (default) or 'minify'
    """
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'No data provided'}), 400

        input_data = data.get('data', '')
        if not isinstance(input_data, str) or not input_data.strip():
            return jsonify({'success': False, 'error': 'No input data provided'}), 400

        mode = data.get('mode', 'pretty')
        if mode not in ('pretty', 'minify'):
            return jsonify({'success': False, 'error': f'Unsupported mode: {mode}'}), 400

        default_indent = current_app.config['TOOLBOX_SETTINGS']['formatter'].get('indent', 2)
        try:
            indent = _parse_indent(data.get('indent', default_indent))
        except (TypeError, ValueError):
            return jsonify({'success': False, 'error': 'Indent must be a number or "tab"'}), 400

        validation = validate_json(input_data)
        if not validation.valid:
            response = validation.to_dict()
            response.pop('valid')
            response['success'] = False
            return jsonify(response), 400

        if mode == 'minify':
            result = minify_json(validation.parsed)
        else:
            result = format_json(validation.parsed, indent)

        return jsonify({'success': True, 'result': result, 'mode': mode})

    except Exception as e:
        logger.exception("JSON formatting failed")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
