from .settings import (
    get_config_directory,
    load_config,
    is_tool_enabled,
    get_enabled_tools,
)
from .tools import TOOLS

__all__ = [
    'TOOLS',
    'get_config_directory',
    'load_config',
    'is_tool_enabled',
    'get_enabled_tools',
]
