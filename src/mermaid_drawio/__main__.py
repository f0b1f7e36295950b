#!/usr/bin/env python3
"""
Mermaid to draw.io - MCP Entry Point

Supports multiple transport modes:
- stdio: Standard I/O (default, for Claude Desktop)
- sse: Server-Sent Events over HTTP
- streamable-http: Streamable HTTP transport
"""

import argparse
import logging
import os
import sys


def main():
    parser = argparse.ArgumentParser(
        prog="mermaid-drawio-mcp",
        description="MCP server converting Mermaid flowcharts to draw.io",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Run with STDIO transport (default, for Claude Desktop)
  mermaid-drawio-mcp

  # Run with SSE transport on port 8080
  mermaid-drawio-mcp --transport sse --port 8080

  # Specify project directory for file operations
  mermaid-drawio-mcp --project-dir /path/to/files

Note: conversion requires mermaid-cli (npm install -g @mermaid-js/mermaid-cli).
"""
    )
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse", "streamable-http"],
        default="stdio",
        help="Transport mode (default: stdio)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=8080,
        help="Port for SSE/HTTP transport (default: 8080)"
    )
    parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to bind for SSE/HTTP transport (default: 0.0.0.0)"
    )
    parser.add_argument(
        "--project-dir",
        type=str,
        default=os.getcwd(),
        help="Project directory for file operations (default: current directory)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__import__('mermaid_drawio').__version__}"
    )

    args = parser.parse_args()

    # Set project directory environment variable
    os.environ["MCP_PROJECT_DIR"] = os.path.abspath(args.project_dir)

    from . import config

    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(level=config.log_level(), stream=sys.stderr)
    logging.getLogger("mcp.server").setLevel(logging.WARNING)

    from .server import mcp

    if args.transport != "stdio":
        mcp.settings.host = args.host
        mcp.settings.port = args.port
        print(f"Starting {args.transport} server on {args.host}:{args.port}", file=sys.stderr)
        print(f"Project directory: {os.environ['MCP_PROJECT_DIR']}", file=sys.stderr)

    mcp.run(transport=args.transport)


if __name__ == "__main__":
    main()
