"""
Mermaid SVG -> Graph extraction.

Walks the SVG that mermaid-cli renders for a flowchart and rebuilds the
boxes and connectors it contains:

- Nodes: ``<g class="node" transform="translate(x, y)">`` groups, sized from
  their inner rect/ellipse/polygon and labelled from their text.
- Edges: ``<path>`` elements under ``<g class="edgePaths">``, routed through
  the waypoints of their path data.

Extraction is best-effort: a malformed attribute degrades to a default or
NaN coordinate and never aborts the rest of the document.
"""

import html.entities
import logging
import math
import re
import xml.etree.ElementTree as ET
from typing import Iterable, Iterator, Optional

from .graph import (
    DECISION_MIN_HEIGHT,
    DECISION_MIN_WIDTH,
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    DOTTED_MODIFIER,
    EDGE_STYLE,
    ELLIPSE_STYLE,
    RECTANGLE_STYLE,
    RHOMBUS_STYLE,
    THICK_MODIFIER,
    Edge,
    Graph,
    Node,
)
from .path_data import waypoints

logger = logging.getLogger(__name__)

SHAPE_TAGS = frozenset({"rect", "ellipse", "polygon"})
LABEL_TAGS = frozenset({"span", "text", "foreignObject"})

NODE_CLASS = "node"
EDGE_PATHS_CLASS = "edgePaths"
THICK_CLASS = "edge-thickness-thick"
DOTTED_CLASS = "edge-pattern-dotted"

_TRANSLATE_RE = re.compile(r"translate\(([^,]+),\s*([^)]+)\)")
_NUMBER_PREFIX_RE = re.compile(r"\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")
_ENTITY_RE = re.compile(r"&([A-Za-z][A-Za-z0-9]*);")
_XML_ENTITIES = frozenset({"amp", "lt", "gt", "quot", "apos"})


class ExtractionError(ValueError):
    """The document could not be parsed as XML at all."""


# ============================================================================
# Tree queries
# ============================================================================

def local_name(element: ET.Element) -> str:
    """Tag name without its ``{namespace}`` prefix."""
    tag = element.tag
    if not isinstance(tag, str):
        return ""
    return tag.split('}')[-1]


def class_tokens(element: ET.Element) -> list[str]:
    return element.get('class', '').split()


def has_class(element: ET.Element, token: str) -> bool:
    return token in class_tokens(element)


def iter_by_tag(element: ET.Element, names: Iterable[str]) -> Iterator[ET.Element]:
    """Yield descendants (not element itself) whose local tag is in names."""
    names = frozenset(names)
    for child in element.iter():
        if child is not element and local_name(child) in names:
            yield child


def iter_by_class(element: ET.Element, token: str) -> Iterator[ET.Element]:
    """Yield descendants carrying token in their class attribute."""
    for child in element.iter():
        if child is not element and has_class(child, token):
            yield child


def text_content(element: ET.Element) -> str:
    """All text below element, concatenated like the DOM textContent."""
    return ''.join(element.itertext())


# ============================================================================
# Lenient numeric parsing
# ============================================================================

def parse_float(value: Optional[str], default: float) -> float:
    """Parse the leading number of value ("80px" -> 80.0), else default."""
    if not value:
        return default
    match = _NUMBER_PREFIX_RE.match(value)
    if not match:
        return default
    return float(match.group(0))


def parse_translate(transform: Optional[str]) -> tuple[float, float]:
    """Offset of a ``translate(x, y)`` transform; (0, 0) when there is none."""
    match = _TRANSLATE_RE.search(transform or '')
    if not match:
        return 0.0, 0.0
    return parse_float(match.group(1), math.nan), parse_float(match.group(2), math.nan)


def _extent(shape: ET.Element, size_attr: str, radius_attr: str, default: float) -> float:
    explicit = shape.get(size_attr)
    if explicit:
        return parse_float(explicit, math.nan)
    # an absent, zero or unparseable radius falls through to the default
    radius = parse_float(shape.get(radius_attr), 0.0)
    if radius:
        return radius * 2
    return default


# ============================================================================
# Parsing
# ============================================================================

def _xmlify_entities(svg_text: str) -> str:
    """Rewrite HTML named entities (&nbsp; etc.) as numeric references."""
    def replace(match: re.Match) -> str:
        name = match.group(1)
        if name in _XML_ENTITIES:
            return match.group(0)
        codepoint = html.entities.name2codepoint.get(name)
        if codepoint is None:
            return match.group(0)
        return f"&#{codepoint};"

    return _ENTITY_RE.sub(replace, svg_text)


def parse_svg(svg_text: str) -> ET.Element:
    try:
        return ET.fromstring(_xmlify_entities(svg_text))
    except ET.ParseError as e:
        raise ExtractionError(f"Invalid SVG: {e}") from e


def _node_label(element: ET.Element) -> str:
    label = ''
    for text_elem in iter_by_tag(element, LABEL_TAGS):
        text = text_content(text_elem).strip()
        if len(text) > len(label):
            label = text
    if not label:
        label = text_content(element).strip()
    return label


def extract_node(element: ET.Element, index: int) -> Node:
    """Build a Node from one ``g.node`` group."""
    x, y = parse_translate(element.get('transform'))

    w, h = DEFAULT_WIDTH, DEFAULT_HEIGHT
    shape = next(iter_by_tag(element, SHAPE_TAGS), None)
    if shape is not None:
        w = _extent(shape, 'width', 'rx', DEFAULT_WIDTH)
        h = _extent(shape, 'height', 'ry', DEFAULT_HEIGHT)

    style = RECTANGLE_STYLE
    if next(iter_by_tag(element, {'polygon'}), None) is not None:
        style = RHOMBUS_STYLE
        w = max(w, DECISION_MIN_WIDTH)
        h = max(h, DECISION_MIN_HEIGHT)
    elif next(iter_by_tag(element, {'ellipse'}), None) is not None:
        style = ELLIPSE_STYLE

    return Node(
        id=element.get('id') or f"node_{index}",
        x=x,
        y=y,
        w=w,
        h=h,
        label=_node_label(element),
        style=style,
    )


def extract_edge(path: ET.Element, index: int) -> Edge:
    """Build an Edge from one connector ``<path>``."""
    style = EDGE_STYLE
    if has_class(path, THICK_CLASS):
        style += THICK_MODIFIER
    if has_class(path, DOTTED_CLASS):
        style += DOTTED_MODIFIER
    return Edge(id=f"edge_{index}", style=style, points=waypoints(path.get('d', '')))


def _edge_paths(root: ET.Element) -> Iterator[ET.Element]:
    seen = set()
    for container in iter_by_class(root, EDGE_PATHS_CLASS):
        if local_name(container) != 'g':
            continue
        for path in iter_by_tag(container, {'path'}):
            # nested edgePaths groups must not yield the same path twice
            if id(path) in seen:
                continue
            seen.add(id(path))
            yield path


def extract_graph(svg_text: str) -> Graph:
    """Parse Mermaid SVG text into a Graph of nodes and edges.

    Raises:
        ExtractionError: if svg_text is not well-formed XML
    """
    root = parse_svg(svg_text)

    node_elements = [e for e in iter_by_class(root, NODE_CLASS) if local_name(e) == 'g']
    nodes = [extract_node(e, i) for i, e in enumerate(node_elements)]
    edges = [extract_edge(p, i) for i, p in enumerate(_edge_paths(root))]

    logger.info("Extracted %d nodes and %d edges", len(nodes), len(edges))
    return Graph(nodes=nodes, edges=edges)
