import logging

from flask import Blueprint, request, jsonify

from ..api.diff import compute_diff, compute_json_diff
from . import tool_disabled_response

logger = logging.getLogger(__name__)

json_diff_bp = Blueprint('json_diff', __name__)

TOOL_ID = 'json-diff'


@json_diff_bp.route('/api/json/diff', methods=['POST'])
def api_diff():
    """Compare two documents line by line

    Options:
    - normalize: re-indent both sides as JSON before comparing (default: true);
      when false the texts are compared as-is
    """
    disabled = tool_disabled_response(TOOL_ID)
    if disabled:
        return disabled

    try:
        data = request.get_json(silent=True)
        if data is None:
            return jsonify({'success': False, 'error': 'Invalid JSON format'}), 400

        if 'left' not in data or 'right' not in data:
            return jsonify({'success': False, 'error': 'Missing left or right'}), 400

        left = data['left']
        right = data['right']
        if not isinstance(left, str) or not isinstance(right, str):
            return jsonify({'success': False, 'error': 'left and right must be strings'}), 400

        if data.get('normalize', True):
            result = compute_json_diff(left, right)
            if not result['success']:
                return jsonify(result), 400
            return jsonify(result)

        result = compute_diff(left, right).to_dict()
        result['success'] = True
        return jsonify(result)

    except Exception as e:
        logger.exception("Diff failed")
        return jsonify({'success': False, 'error': f'Server error: {str(e)}'}), 500
