"""Tests for Mermaid SVG -> Graph extraction."""

import math

import pytest

from mermaid_drawio.extractor import (
    ExtractionError,
    extract_graph,
    parse_float,
    parse_translate,
)
from mermaid_drawio.graph import (
    DOTTED_MODIFIER,
    EDGE_STYLE,
    NODE_STYLES,
    ELLIPSE_STYLE,
    RECTANGLE_STYLE,
    RHOMBUS_STYLE,
    THICK_MODIFIER,
    Point,
)

SVG_NS = 'xmlns="http://www.w3.org/2000/svg"'


def svg(body: str) -> str:
    return f'<svg {SVG_NS}>{body}</svg>'


def single_node(body: str, attrs: str = 'transform="translate(0,0)"'):
    graph = extract_graph(svg(f'<g class="node" {attrs}>{body}</g>'))
    assert len(graph.nodes) == 1
    return graph.nodes[0]


def test_translate_and_rect_size():
    graph = extract_graph(svg(
        '<g class="node" id="A" transform="translate(50,50)">'
        '<rect width="80" height="40"/><text>Process</text></g>'
    ))
    [node] = graph.nodes
    assert (node.id, node.x, node.y, node.w, node.h) == ("A", 50, 50, 80, 40)
    assert node.label == "Process"
    assert node.style == RECTANGLE_STYLE
    assert graph.edges == []


@pytest.mark.parametrize("transform,expected", [
    ("translate(12.5, -3)", (12.5, -3.0)),
    ("translate(7,8) scale(2)", (7.0, 8.0)),
    ("", (0.0, 0.0)),
    (None, (0.0, 0.0)),
    ("translate(10 20)", (0.0, 0.0)),
    ("rotate(45)", (0.0, 0.0)),
])
def test_parse_translate(transform, expected):
    assert parse_translate(transform) == expected


def test_parse_translate_non_numeric_group_is_nan():
    x, y = parse_translate("translate(abc, 4)")
    assert math.isnan(x)
    assert y == 4


def test_parse_float_reads_leading_number():
    assert parse_float("80px", 0.0) == 80.0
    assert parse_float(" -1.5e2", 0.0) == -150.0
    assert parse_float("auto", 7.0) == 7.0
    assert parse_float(None, 7.0) == 7.0


def test_missing_transform_places_node_at_origin():
    node = single_node('<text>x</text>', attrs='')
    assert (node.x, node.y) == (0, 0)


def test_no_shape_uses_default_size():
    node = single_node('<text>Just text</text>')
    assert (node.w, node.h) == (100, 50)
    assert node.style == RECTANGLE_STYLE


def test_ellipse_size_from_radii():
    node = single_node('<ellipse rx="30" ry="20"/><text>Done</text>')
    assert (node.w, node.h) == (60, 40)
    assert node.style == ELLIPSE_STYLE


def test_zero_radius_falls_back_to_default():
    node = single_node('<ellipse rx="0" ry="20"/>')
    assert (node.w, node.h) == (100, 40)


def test_unparseable_width_is_nan():
    node = single_node('<rect width="auto" height="30"/>')
    assert math.isnan(node.w)
    assert node.h == 30


def test_polygon_is_rhombus_with_minimum_size():
    node = single_node('<polygon points="0,0 10,10 0,20"/><text>Ok?</text>')
    assert node.style == RHOMBUS_STYLE
    assert (node.w, node.h) == (140, 80)


def test_polygon_keeps_larger_extracted_size():
    node = single_node('<rect width="200" height="60"/><polygon points="0,0"/>')
    assert node.style == RHOMBUS_STYLE
    assert (node.w, node.h) == (200, 80)


def test_polygon_wins_over_ellipse():
    node = single_node('<ellipse rx="5" ry="5"/><polygon points="0,0"/>')
    assert node.style == RHOMBUS_STYLE


def test_longest_label_wins():
    node = single_node('<text>short</text><foreignObject><span>a longer label</span></foreignObject>')
    assert node.label == "a longer label"


def test_label_ties_keep_first_found():
    node = single_node('<text>abc</text><text>xyz</text>')
    assert node.label == "abc"


def test_label_inside_xhtml_foreign_object():
    node = single_node(
        '<foreignObject><div xmlns="http://www.w3.org/1999/xhtml">'
        '<span class="nodeLabel"><p>  Hello world  </p></span></div></foreignObject>'
    )
    assert node.label == "Hello world"


def test_label_falls_back_to_node_text():
    node = single_node('<rect width="10" height="10"/><title>  Fallback  </title>')
    assert node.label == "Fallback"


def test_html_entities_in_labels():
    node = single_node('<text>A&nbsp;B &amp; C</text>')
    assert node.label == "A\u00a0B & C"


def test_synthesized_node_ids():
    graph = extract_graph(svg(
        '<g class="node"><text>one</text></g>'
        '<g class="node" id="named"><text>two</text></g>'
        '<g class="node"><text>three</text></g>'
    ))
    assert [n.id for n in graph.nodes] == ["node_0", "named", "node_2"]


def test_only_g_node_groups_are_nodes():
    graph = extract_graph(svg('<rect class="node" width="5" height="5"/><g class="nodes"/>'))
    assert graph.nodes == []


def test_edges_from_edge_paths(flowchart_svg):
    graph = extract_graph(flowchart_svg)
    assert [e.id for e in graph.edges] == ["edge_0", "edge_1"]

    normal, thick = graph.edges
    assert normal.style == EDGE_STYLE
    assert normal.points == [Point(x=100, y=62), Point(x=100, y=87), Point(x=100, y=112)]
    assert thick.style == EDGE_STYLE + THICK_MODIFIER + DOTTED_MODIFIER
    assert thick.points == [Point(x=100, y=190), Point(x=100, y=215)]


def test_paths_outside_edge_paths_are_ignored():
    graph = extract_graph(svg(
        '<g class="markers"><path d="M0,0 L1,1"/></g>'
        '<g class="edgePaths"><path d="M5,5"/></g>'
    ))
    assert len(graph.edges) == 1
    assert graph.edges[0].points == [Point(x=5, y=5)]


def test_edge_without_path_data_has_no_points():
    graph = extract_graph(svg('<g class="edgePaths"><path/></g>'))
    assert graph.edges[0].points == []


def test_full_flowchart(flowchart_svg):
    graph = extract_graph(flowchart_svg)
    begin, ready, done = graph.nodes

    assert (begin.id, begin.label, begin.style) == ("flowchart-A-0", "Begin task", RECTANGLE_STYLE)
    assert (begin.x, begin.y, begin.w, begin.h) == (100, 35, 140, 54)

    assert (ready.label, ready.style) == ("Ready?", RHOMBUS_STYLE)
    assert (ready.w, ready.h) == (140, 80)

    assert (done.label, done.style) == ("Done", ELLIPSE_STYLE)
    assert (done.w, done.h) == (60, 40)


def test_invalid_xml_raises():
    with pytest.raises(ExtractionError):
        extract_graph("<svg><g class='node'></svg>")


def test_nested_edge_paths_yield_each_path_once():
    graph = extract_graph(svg(
        '<g class="edgePaths">'
        '<path d="M1,1"/>'
        '<g class="edgePaths"><path d="M2,2"/></g>'
        '</g>'
    ))
    assert [e.id for e in graph.edges] == ["edge_0", "edge_1"]
    assert [e.points[0].x for e in graph.edges] == [1, 2]


def test_extracted_styles_come_from_fixed_set(flowchart_svg):
    graph = extract_graph(flowchart_svg)
    assert {n.style for n in graph.nodes} <= set(NODE_STYLES)
