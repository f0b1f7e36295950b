#!/usr/bin/env python3
"""
Mermaid to draw.io - MCP Server Implementation
===============================================

Exposes the Mermaid -> draw.io converter as MCP tools.

Tools:
- mermaid_to_drawio: Render Mermaid code with mermaid-cli and save a .drawio file
- svg_to_drawio: Convert an already rendered Mermaid SVG to a .drawio file
"""

import json
import logging
import tempfile
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from . import config
from .converter import convert_file, write_drawio
from .renderer import RenderError

logger = logging.getLogger(__name__)

DRAWIO_SUFFIXES = ('.drawio', '.xml')


def _resolve_path(path: str) -> Path:
    """Resolve path relative to project directory and validate it stays within."""
    project_dir = config.project_dir()
    resolved = (project_dir / path).resolve()
    try:
        resolved.relative_to(project_dir)
    except ValueError:
        raise ValueError(f"Path '{path}' escapes the project directory")
    return resolved


def _relative(path: Path) -> str:
    return str(Path(path).relative_to(config.project_dir()))


@asynccontextmanager
async def server_lifespan(server: FastMCP):
    """Initialize on startup, cleanup on shutdown."""
    # Ensure project directory exists
    config.project_dir().mkdir(parents=True, exist_ok=True)
    yield


# Initialize the MCP server
mcp = FastMCP("mermaid-drawio", lifespan=server_lifespan)


@mcp.tool()
async def mermaid_to_drawio(
    path: Annotated[str, Field(description="Output path for the .drawio file (relative to project directory)")],
    mermaid_code: Annotated[str, Field(description="Mermaid flowchart syntax")],
    add_start_end: Annotated[bool, Field(description="Add Start/End nodes when the flowchart has none")] = True,
) -> str:
    """Create an editable draw.io diagram from a Mermaid flowchart.

    mermaid-cli lays the flowchart out; the resulting boxes, diamonds,
    circles and connectors are rebuilt as draw.io cells at the same
    coordinates.

    Example Mermaid code:
    ```
    flowchart TD
        A[Start] --> B{Decision}
        B -->|Yes| C[Process]
        B -->|No| D[End]
        C --> D
    ```

    Args:
        path: Output file path ending in .drawio or .xml
        mermaid_code: Mermaid flowchart syntax
        add_start_end: Add Start/End nodes when missing

    Returns:
        JSON string with success status, output path and cell counts
    """
    try:
        file_path = _resolve_path(path)

        if file_path.suffix.lower() not in DRAWIO_SUFFIXES:
            return json.dumps({
                "error": f"Output path must end with .drawio or .xml, got: {path}"
            })

        if not mermaid_code or not mermaid_code.strip():
            return json.dumps({
                "error": "mermaid_code cannot be empty"
            })

        with tempfile.NamedTemporaryFile(mode='w', suffix='.mmd', delete=False, encoding='utf-8') as mmd_file:
            mmd_file.write(mermaid_code.strip())
            mmd_path = Path(mmd_file.name)

        try:
            result = await convert_file(mmd_path, file_path, add_start_end=add_start_end)
        finally:
            mmd_path.unlink(missing_ok=True)

        return json.dumps({
            "success": True,
            "path": _relative(file_path),
            "format": "drawio",
            "node_count": result.node_count,
            "edge_count": result.edge_count,
            "added_start": result.added_start,
            "added_end": result.added_end,
        }, indent=2)

    except RenderError as e:
        return json.dumps({
            "error": str(e),
            "stderr": e.stderr,
            "hint": "Check your Mermaid syntax at https://mermaid.live/"
        }, indent=2)
    except ValueError as e:
        return json.dumps({"error": str(e)})
    except Exception as e:
        logger.exception("Mermaid conversion failed")
        return json.dumps({"error": f"Mermaid conversion failed: {str(e)}"})


@mcp.tool()
def svg_to_drawio(
    svg_path: Annotated[str, Field(description="Mermaid-rendered SVG file (relative to project directory)")],
    path: Annotated[str, Field(description="Output path for the .drawio file (relative to project directory)")],
    add_start_end: Annotated[bool, Field(description="Add Start/End nodes when the flowchart has none")] = True,
) -> str:
    """Convert an SVG already rendered by mermaid-cli into a draw.io diagram.

    Args:
        svg_path: Source SVG file path
        path: Output file path ending in .drawio or .xml
        add_start_end: Add Start/End nodes when missing

    Returns:
        JSON string with success status, output path and cell counts
    """
    try:
        source = _resolve_path(svg_path)
        target = _resolve_path(path)

        if not source.exists():
            return json.dumps({"error": f"Source file not found: {svg_path}"})

        if target.suffix.lower() not in DRAWIO_SUFFIXES:
            return json.dumps({
                "error": f"Output path must end with .drawio or .xml, got: {path}"
            })

        result = write_drawio(
            source.read_text(encoding='utf-8'),
            target,
            add_start_end=add_start_end,
        )

        return json.dumps({
            "success": True,
            "source": svg_path,
            "path": _relative(target),
            "format": "drawio",
            "node_count": result.node_count,
            "edge_count": result.edge_count,
            "added_start": result.added_start,
            "added_end": result.added_end,
        }, indent=2)

    except ValueError as e:
        # ExtractionError is a ValueError too
        return json.dumps({"error": str(e)})
    except Exception as e:
        logger.exception("SVG conversion failed")
        return json.dumps({"error": f"Conversion failed: {str(e)}"})
