"""
Graph -> draw.io XML.

Produces the ``mxGraphModel`` cell tree draw.io opens directly: the two
bookkeeping cells ("0" and its child layer "1"), one vertex cell per node
and one edge cell per edge, all parented to layer "1".
"""

import math
import xml.etree.ElementTree as ET

from .graph import Graph

DEFAULT_PAGE_NAME = "Page-1"


def format_number(value: float) -> str:
    """Render a coordinate the way draw.io writes them (50, 12.5, NaN)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def build_model(graph: Graph) -> ET.Element:
    """Build the mxGraphModel element for graph."""
    mxgraph = ET.Element('mxGraphModel')
    root_elem = ET.SubElement(mxgraph, 'root')

    # Add required root cells
    ET.SubElement(root_elem, 'mxCell', {'id': '0'})
    ET.SubElement(root_elem, 'mxCell', {'id': '1', 'parent': '0'})

    for node in graph.nodes:
        cell = ET.SubElement(root_elem, 'mxCell', {
            'id': node.id,
            'value': node.label,
            'style': node.style,
            'vertex': '1',
            'parent': '1'
        })
        ET.SubElement(cell, 'mxGeometry', {
            'x': format_number(node.x),
            'y': format_number(node.y),
            'width': format_number(node.w),
            'height': format_number(node.h),
            'as': 'geometry'
        })

    for edge in graph.edges:
        cell = ET.SubElement(root_elem, 'mxCell', {
            'id': edge.id,
            'style': edge.style,
            'edge': '1',
            'parent': '1'
        })
        geometry = ET.SubElement(cell, 'mxGeometry', {'relative': '1', 'as': 'geometry'})
        points = ET.SubElement(geometry, 'Array', {'as': 'points'})
        for point in edge.points:
            ET.SubElement(points, 'mxPoint', {
                'x': format_number(point.x),
                'y': format_number(point.y)
            })

    return mxgraph


def wrap_mxfile(model: ET.Element, name: str = DEFAULT_PAGE_NAME) -> ET.Element:
    """Place a model inside the multi-page ``<mxfile><diagram>`` envelope."""
    mxfile = ET.Element('mxfile', {'host': 'mermaid-drawio'})
    diagram = ET.SubElement(mxfile, 'diagram', {'name': name, 'id': 'diagram-1'})
    diagram.append(model)
    return mxfile


def graph_to_drawio_xml(graph: Graph, mxfile: bool = False, name: str = DEFAULT_PAGE_NAME) -> str:
    """Serialize graph as pretty-printed draw.io XML with a UTF-8 declaration.

    Args:
        graph: The graph to serialize; ids are written as-is, unchecked
        mxfile: Wrap the model in an mxfile/diagram envelope
        name: Page name used for the envelope

    Returns:
        The XML document as text
    """
    element = build_model(graph)
    if mxfile:
        element = wrap_mxfile(element, name)
    ET.indent(element, space='  ')
    return ET.tostring(element, encoding='UTF-8', xml_declaration=True).decode('utf-8')
