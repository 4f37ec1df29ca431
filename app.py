#!/usr/bin/env python3
"""
Main entry point for the JSON Toolbox application.
This file serves as the application launcher that builds and runs the Flask app from the src directory.
"""

import sys
import argparse
from pathlib import Path

# Add the src directory to the Python path so we can run without installing
project_root = Path(__file__).parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

from json_toolbox.main import create_app


def main():
    parser = argparse.ArgumentParser(description='JSON Toolbox Server')
    parser.add_argument('--port', '-p', type=int, default=8000,
                        help='Port to run the server on (default: 8000)')
    parser.add_argument('--host', default='127.0.0.1',
                        help='Host to bind to (default: 127.0.0.1)')
    parser.add_argument('--config-dir', type=Path, default=None,
                        help='Directory containing config.json')
    parser.add_argument('--debug', action='store_true',
                        help='Run Flask in debug mode')
    args = parser.parse_args()

    app = create_app(args.config_dir)

    try:
        print(f"Starting JSON Toolbox on http://{args.host}:{args.port}")
        app.run(host=args.host, port=args.port, debug=args.debug)
    except KeyboardInterrupt:
        print("\nServer stopped by user")


if __name__ == '__main__':
    main()
