from flask import current_app, jsonify

from ..config import is_tool_enabled


def tool_disabled_response(tool_id: str):
    """Return a 404 response when tool_id is switched off in config.json, else None."""
    settings = current_app.config.get('TOOLBOX_SETTINGS', {})
    if is_tool_enabled(tool_id, settings):
        return None
    return jsonify({'success': False, 'error': 'Tool is disabled'}), 404
