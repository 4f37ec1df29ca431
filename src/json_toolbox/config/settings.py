"""
Configuration loading for the JSON toolbox.

Settings live in ``config.json`` inside the config directory
(``$JSON_TOOLBOX_CONFIG_DIR`` or ``~/.config/json-toolbox``)::

    {
        "tools": {"json-diff": {"enabled": false}},
        "logging": {"level": "DEBUG", "file": "logs/json-toolbox.log"},
        "formatter": {"indent": 4}
    }
"""

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_CONFIG: Dict[str, Any] = {
    'tools': {},
    'logging': {
        'level': 'INFO',
        'file': None
    },
    'formatter': {
        'indent': 2
    }
}


def get_config_directory() -> Path:
    """Get the config directory path."""
    config_dir = os.environ.get('JSON_TOOLBOX_CONFIG_DIR')
    if config_dir:
        return Path(config_dir)

    # Default to ~/.config/json-toolbox
    return Path.home() / '.config' / 'json-toolbox'


def load_config(config_dir: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load config.json merged over the defaults.

    A missing or unreadable file yields the defaults.
    """
    config = copy.deepcopy(DEFAULT_CONFIG)
    config_file = Path(config_dir or get_config_directory()) / 'config.json'

    if config_file.exists():
        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                loaded = json.load(f)
        except (json.JSONDecodeError, IOError):
            loaded = {}
        if isinstance(loaded, dict):
            for section, values in loaded.items():
                if isinstance(values, dict) and isinstance(config.get(section), dict):
                    config[section].update(values)
                else:
                    config[section] = values

    level = os.environ.get('JSON_TOOLBOX_LOG_LEVEL')
    if level:
        config['logging']['level'] = level.upper()

    return config


def is_tool_enabled(tool_id: str, config: Dict[str, Any]) -> bool:
    """Check if a tool is enabled in config. Defaults to True if not specified."""
    tool_conf = config.get('tools', {}).get(tool_id, {})
    return tool_conf.get('enabled', True)


def get_enabled_tools(tools_list: List[Dict[str, Any]], config: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Filter tools list to only include enabled tools."""
    return [tool for tool in tools_list if is_tool_enabled(tool.get('id', ''), config)]
