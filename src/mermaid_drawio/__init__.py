"""
Mermaid to draw.io
==================

Converts Mermaid flowcharts into editable draw.io diagrams.

mermaid-cli renders the flowchart to SVG; the SVG's node groups and edge
paths are rebuilt as an mxGraphModel at the same coordinates, with Start
and End terminals added when the flowchart has none.

Entry points:
- mermaid-drawio: command line converter
- mermaid-drawio-mcp: MCP server (stdio, SSE or streamable HTTP)
"""

__version__ = "0.1.0"

from .converter import ConversionResult, convert_file, convert_svg
from .extractor import ExtractionError, extract_graph
from .graph import Edge, Graph, Node, Point
from .renderer import RenderError, render_mermaid_svg
from .serializer import graph_to_drawio_xml
from .synthesis import ensure_start_end

__all__ = [
    "ConversionResult",
    "Edge",
    "ExtractionError",
    "Graph",
    "Node",
    "Point",
    "RenderError",
    "convert_file",
    "convert_svg",
    "ensure_start_end",
    "extract_graph",
    "graph_to_drawio_xml",
    "render_mermaid_svg",
    "__version__",
]
