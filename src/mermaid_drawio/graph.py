"""
Graph model shared by the extractor, the start/end synthesizer and the
draw.io serializer.
"""

from typing import Optional

from pydantic import BaseModel, Field

# draw.io vertex styles, one per recognised Mermaid shape
RECTANGLE_STYLE = "whiteSpace=wrap;html=1;fontSize=12;fillColor=#ffffff;strokeColor=#000000;"
RHOMBUS_STYLE = "shape=rhombus;whiteSpace=wrap;html=1;fontSize=12;"
ELLIPSE_STYLE = "shape=ellipse;whiteSpace=wrap;html=1;"

NODE_STYLES = (RECTANGLE_STYLE, RHOMBUS_STYLE, ELLIPSE_STYLE)

# draw.io edge style plus the modifiers for Mermaid's link variants
EDGE_STYLE = "edgeStyle=orthogonalEdgeStyle;rounded=1;curved=1;html=1;endArrow=classic;"
THICK_MODIFIER = "strokeWidth=3;"
DOTTED_MODIFIER = "dashed=1;"

DEFAULT_WIDTH = 100.0
DEFAULT_HEIGHT = 50.0

# Decision diamonds are drawn larger so their labels stay readable
DECISION_MIN_WIDTH = 140.0
DECISION_MIN_HEIGHT = 80.0


class Point(BaseModel):
    x: float
    y: float


class Node(BaseModel):
    """A flowchart box: top-left position, size, label and draw.io style."""

    id: str
    x: float = 0.0
    y: float = 0.0
    w: float = DEFAULT_WIDTH
    h: float = DEFAULT_HEIGHT
    label: str = ""
    style: str = RECTANGLE_STYLE

    @property
    def bottom_center(self) -> Point:
        return Point(x=self.x + self.w / 2, y=self.y + self.h)


class Edge(BaseModel):
    """A connector with its waypoints in draw order."""

    id: str
    style: str = EDGE_STYLE
    points: list[Point] = Field(default_factory=list)


class Graph(BaseModel):
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    def find_label(self, fragment: str) -> Optional[Node]:
        """Return the first node whose label contains fragment, ignoring case."""
        fragment = fragment.lower()
        for node in self.nodes:
            if fragment in node.label.lower():
                return node
        return None
