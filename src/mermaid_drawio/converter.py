"""
Mermaid -> draw.io conversion pipeline.

render (mermaid-cli) -> extract (SVG -> Graph) -> synthesize start/end ->
serialize (Graph -> mxGraphModel XML) -> write.
"""

import logging
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Sequence

from pydantic import BaseModel

from .extractor import extract_graph
from .graph import Graph
from .renderer import render_mermaid_svg
from .serializer import DEFAULT_PAGE_NAME, graph_to_drawio_xml
from .synthesis import END_ID, START_ID, ensure_start_end

logger = logging.getLogger(__name__)


class ConversionResult(BaseModel):
    output_path: str
    node_count: int
    edge_count: int
    added_start: bool = False
    added_end: bool = False


def build_graph(svg_text: str, add_start_end: bool = True) -> Graph:
    graph = extract_graph(svg_text)
    if add_start_end:
        graph = ensure_start_end(graph)
    return graph


def convert_svg(
    svg_text: str,
    add_start_end: bool = True,
    mxfile: bool = False,
    name: str = DEFAULT_PAGE_NAME,
) -> str:
    """Convert Mermaid SVG text straight to draw.io XML text."""
    return graph_to_drawio_xml(build_graph(svg_text, add_start_end), mxfile=mxfile, name=name)


def write_drawio(
    svg_text: str,
    output_path: Path,
    add_start_end: bool = True,
    mxfile: bool = False,
    name: str = DEFAULT_PAGE_NAME,
) -> ConversionResult:
    """Convert SVG text and write the draw.io file, creating parent dirs."""
    graph = build_graph(svg_text, add_start_end)
    content = graph_to_drawio_xml(graph, mxfile=mxfile, name=name)

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding='utf-8')

    ids = {node.id for node in graph.nodes}
    return ConversionResult(
        output_path=str(output_path),
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        added_start=START_ID in ids,
        added_end=END_ID in ids,
    )


async def convert_file(
    input_path: Path,
    output_path: Path,
    add_start_end: bool = True,
    keep_svg: Optional[Path] = None,
    mxfile: bool = False,
    command: Optional[Sequence[str]] = None,
    timeout: Optional[float] = None,
) -> ConversionResult:
    """Render a Mermaid file with mermaid-cli and convert it to draw.io.

    The intermediate SVG lives in a temporary file that is removed whether
    or not the conversion succeeds; pass keep_svg to keep a copy.

    Raises:
        FileNotFoundError: input_path does not exist
        RenderError: mermaid-cli failed
        ExtractionError: mermaid-cli produced something that is not XML
    """
    input_path = Path(input_path)
    if not input_path.is_file():
        raise FileNotFoundError(f"Input file does not exist: {input_path}")

    with tempfile.NamedTemporaryFile(suffix='.svg', delete=False) as tmp:
        svg_path = Path(tmp.name)

    try:
        await render_mermaid_svg(input_path, svg_path, command=command, timeout=timeout)
        svg_text = svg_path.read_text(encoding='utf-8')
        logger.info("Extracting coordinates from SVG...")

        if keep_svg is not None:
            Path(keep_svg).parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(svg_path, keep_svg)

        return write_drawio(
            svg_text,
            Path(output_path),
            add_start_end=add_start_end,
            mxfile=mxfile,
            name=input_path.stem,
        )
    finally:
        svg_path.unlink(missing_ok=True)
