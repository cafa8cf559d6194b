from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

from .config import ServerConfig, load_server_config
from .errors import ConfigError
from .logging_utils import configure_logging
from .server import create_app


def _load_config(args: argparse.Namespace, overrides: Optional[dict[str, Any]] = None) -> ServerConfig:
    path = Path(args.config).expanduser() if args.config else None
    return load_server_config(path, overrides=overrides)


def _server(args: argparse.Namespace) -> int:
    try:
        import uvicorn
    except ImportError:
        sys.stderr.write("Install uvicorn to run the server: pip install uvicorn\n")
        return 1

    overrides: dict[str, Any] = {
        'host': args.host,
        'port': args.port,
        'log_level': args.log_level,
    }
    if args.no_cors:
        overrides['enable_cors'] = False
    try:
        config = _load_config(args, overrides)
    except ConfigError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 1

    configure_logging(config.log_level)
    app = create_app(enable_cors=config.enable_cors, config=config)
    logger.info("Server is running on http://{}:{}", config.host, config.port)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())
    return 0


def _openapi(args: argparse.Namespace) -> int:
    try:
        config = _load_config(args)
    except ConfigError as exc:
        sys.stderr.write(f"Invalid configuration: {exc}\n")
        return 1

    schema = create_app(enable_cors=False, config=config).openapi()
    text = json.dumps(schema, indent=2) + '\n'
    if args.output:
        out = Path(args.output).expanduser()
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(text, encoding='utf-8')
    else:
        sys.stdout.write(text)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Task Manager API')
    parser.add_argument('--config', default=None, help='Optional YAML config file')
    subparsers = parser.add_subparsers(dest='command', required=True)

    server = subparsers.add_parser('server', help='Start the web server')
    server.add_argument('--host', default=None, help='Bind address (default: 127.0.0.1)')
    server.add_argument('--port', default=None, type=int, help='Port (default: 3000)')
    server.add_argument('--log-level', default=None, help='Log level (default: INFO)')
    server.add_argument('--no-cors', action='store_true', help='Disable CORS middleware')
    server.set_defaults(func=_server)

    openapi = subparsers.add_parser('openapi', help='Print the generated OpenAPI document')
    openapi.add_argument('--output', default=None, help='Write to this file instead of stdout')
    openapi.set_defaults(func=_openapi)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    return int(handler(args) or 0)
