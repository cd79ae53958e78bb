"""Run the server: ``python -m remote_mcp_server [--host HOST] [--port PORT] [--log-level LEVEL]``."""

import argparse
from typing import List, Optional

import uvicorn

from .mcp_impl import create_app
from .tool_core import ServerConfig, setup_logging


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="remote-mcp-server",
        description="Serve the arithmetic and GitHub PR tools over SSE (/sse) and streamable HTTP (/mcp).",
    )
    parser.add_argument("--host", help="Interface to bind (default: $HOST or 127.0.0.1).")
    parser.add_argument("--port", type=int, help="Port to listen on (default: $PORT or 8787).")
    parser.add_argument("--log-level", help="Logging level (default: $LOG_LEVEL or INFO).")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = ServerConfig.from_env()
    overrides = {
        key: value
        for key, value in {"host": args.host, "port": args.port, "log_level": args.log_level}.items()
        if value is not None
    }
    if overrides:
        config = config.model_copy(update=overrides)

    setup_logging(config.log_level)
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port, log_level=config.log_level.lower())


if __name__ == "__main__":
    main()
