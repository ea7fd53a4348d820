#!/usr/bin/env python3

import uvicorn
from advisor import ChatAdvisor
from api import create_app
from llm import get_advisor_provider
from logger import get_logger

logger = get_logger()


def cmd_serve(args, services):
    """Run the HTTP API under uvicorn."""
    config = services.config
    host = args.host or config.api_host
    port = args.port or config.api_port

    app = create_app(services, ChatAdvisor(services, get_advisor_provider(config)))
    logger.info(f"Serving on http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_level=config.log_level.lower())


def setup_parser(subparsers):
    """Setup serve command parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "serve",
        help="Run the HTTP API",
        description="Serve the dashboard and chat API",
    )
    parser.add_argument("--host", help="Bind address (default from config)")
    parser.add_argument("--port", type=int, help="Port (default from config)")
    parser.set_defaults(func=cmd_serve)
