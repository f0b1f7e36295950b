"""
Start/end terminal synthesis.

Flowcharts exported to draw.io are expected to open with a "Start" box and
close with an "End" box. When the Mermaid source has neither, they are
added above the first node and below the last one, wired with a connector.
"""

import logging

from .graph import EDGE_STYLE, RECTANGLE_STYLE, Edge, Graph, Node, Point

logger = logging.getLogger(__name__)

START_ID = "auto_start"
END_ID = "auto_end"
START_EDGE_ID = "auto_start_edge"
END_EDGE_ID = "auto_end_edge"

START_OFFSET = 120.0  # distance from the start node's top to the first node's top
END_GAP = 60.0        # gap between the last node's bottom and the end node
EMPTY_START = Point(x=100.0, y=50.0)


def _terminal(node_id: str, label: str, x: float, y: float) -> Node:
    return Node(id=node_id, x=x, y=y, w=100.0, h=50.0, label=label, style=RECTANGLE_STYLE)


def ensure_start_end(graph: Graph) -> Graph:
    """Return a copy of graph with Start/End terminals added where missing.

    Existing nodes and edges are never modified; the start terminal and its
    connector are prepended, the end terminal and its connector appended.
    A graph that already has both labels comes back unchanged.
    """
    nodes = list(graph.nodes)
    edges = list(graph.edges)

    if graph.find_label("start") is None:
        first = nodes[0] if nodes else None
        if first is not None:
            start = _terminal(START_ID, "Start", first.x, first.y - START_OFFSET)
        else:
            start = _terminal(START_ID, "Start", EMPTY_START.x, EMPTY_START.y)
        nodes.insert(0, start)

        if first is not None:
            anchor = start.bottom_center
            edges.insert(0, Edge(
                id=START_EDGE_ID,
                style=EDGE_STYLE,
                points=[anchor, Point(x=anchor.x, y=first.y)],
            ))

    if graph.find_label("end") is None:
        last = nodes[-1]
        end = _terminal(END_ID, "End", last.x, last.y + last.h + END_GAP)
        nodes.append(end)

        anchor = last.bottom_center
        edges.append(Edge(
            id=END_EDGE_ID,
            style=EDGE_STYLE,
            points=[anchor, Point(x=anchor.x, y=end.y)],
        ))

    logger.info(
        "Final diagram: %d nodes and %d edges (auto-added start/end if needed)",
        len(nodes), len(edges),
    )
    return Graph(nodes=nodes, edges=edges)
