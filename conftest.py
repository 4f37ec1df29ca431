"""
pytest configuration for JSON Toolbox.
Puts src/ on the import path and provides an isolated config directory and Flask client.
"""

import json
import sys
from pathlib import Path

import pytest

project_root = Path(__file__).parent.absolute()
sys.path.insert(0, str(project_root / "src"))


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Empty config directory, also exported through JSON_TOOLBOX_CONFIG_DIR."""
    monkeypatch.setenv('JSON_TOOLBOX_CONFIG_DIR', str(tmp_path))
    monkeypatch.delenv('JSON_TOOLBOX_LOG_LEVEL', raising=False)
    return tmp_path


@pytest.fixture
def write_config(config_dir):
    """Write a config.json into the isolated config directory."""
    def _write(config):
        (config_dir / 'config.json').write_text(json.dumps(config), encoding='utf-8')
        return config_dir
    return _write


@pytest.fixture
def app(config_dir):
    from json_toolbox.main import create_app
    application = create_app(config_dir)
    application.config['TESTING'] = True
    return application


@pytest.fixture
def client(app):
    return app.test_client()
