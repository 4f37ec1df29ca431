import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify

from .config import TOOLS, load_config, get_enabled_tools
from .utils.logging_config import configure_from_settings
from .blueprints.formatter import formatter_bp
from .blueprints.path_query import path_query_bp
from .blueprints.json_diff import json_diff_bp
from .blueprints.converter import converter_bp
from .blueprints.schema import schema_bp

logger = logging.getLogger(__name__)


def create_app(config_dir: Optional[Path] = None) -> Flask:
    """
    Build the Flask application.

    Args:
        config_dir: Directory holding config.json (defaults to the
            JSON_TOOLBOX_CONFIG_DIR environment variable or ~/.config/json-toolbox)
    """
    settings = load_config(config_dir)
    configure_from_settings(settings)

    app = Flask(__name__)
    app.config['TOOLBOX_SETTINGS'] = settings

    app.register_blueprint(formatter_bp)
    app.register_blueprint(path_query_bp)
    app.register_blueprint(json_diff_bp)
    app.register_blueprint(converter_bp)
    app.register_blueprint(schema_bp)

    @app.route('/api/tools')
    def api_tools():
        return jsonify({'tools': get_enabled_tools(TOOLS, settings)})

    @app.route('/health')
    def health():
        return jsonify({
            'status': 'healthy',
            'timestamp': datetime.now().isoformat(),
            'tools_count': len(get_enabled_tools(TOOLS, settings))
        })

    logger.info("JSON toolbox ready with %d enabled tools", len(get_enabled_tools(TOOLS, settings)))
    return app
