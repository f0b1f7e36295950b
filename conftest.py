"""Shared fixtures: a Mermaid-style flowchart SVG and a stand-in for mmdc."""

import sys
import textwrap

import pytest

# Trimmed-down output of `mmdc` for:
#   flowchart TD
#       A[Begin task] --> B{Ready?}
#       B ==>|yes| C((Done))
FLOWCHART_SVG = """\
<svg id="my-svg" xmlns="http://www.w3.org/2000/svg" class="flowchart" viewBox="0 0 200 400">
  <g class="root">
    <g class="clusters"/>
    <g class="edgePaths">
      <path d="M100,62L100,87C100,87,100,112,100,112" id="L_A_B_0" class="edge-thickness-normal edge-pattern-solid flowchart-link"/>
      <path d="M100,190L100,215" id="L_B_C_0" class="edge-thickness-thick edge-pattern-dotted flowchart-link"/>
    </g>
    <g class="edgeLabels">
      <g class="edgeLabel"><g class="label"><foreignObject width="20" height="24"><div xmlns="http://www.w3.org/1999/xhtml"><span class="edgeLabel">yes</span></div></foreignObject></g></g>
    </g>
    <g class="nodes">
      <g class="node default" id="flowchart-A-0" transform="translate(100, 35)">
        <rect class="basic label-container" x="-70" y="-27" width="140" height="54"/>
        <g class="label" transform="translate(-40, -12)"><rect/><foreignObject width="80" height="24"><div xmlns="http://www.w3.org/1999/xhtml"><span class="nodeLabel"><p>Begin task</p></span></div></foreignObject></g>
      </g>
      <g class="node default" id="flowchart-B-1" transform="translate(100, 151)">
        <polygon points="39,0 78,-39 39,-78 0,-39" class="label-container" transform="translate(-39,39)"/>
        <g class="label" transform="translate(-25, -12)"><rect/><foreignObject width="50" height="24"><div xmlns="http://www.w3.org/1999/xhtml"><span class="nodeLabel"><p>Ready?</p></span></div></foreignObject></g>
      </g>
      <g class="node default" id="flowchart-C-2" transform="translate(100, 260)">
        <ellipse class="label-container" rx="30" ry="20"/>
        <g class="label" transform="translate(-18, -12)"><rect/><foreignObject width="36" height="24"><div xmlns="http://www.w3.org/1999/xhtml"><span class="nodeLabel"><p>Done</p></span></div></foreignObject></g>
      </g>
    </g>
  </g>
</svg>
"""


@pytest.fixture
def flowchart_svg():
    return FLOWCHART_SVG


def _write_script(path, body):
    path.write_text(textwrap.dedent(body), encoding='utf-8')
    return [sys.executable, str(path)]


@pytest.fixture
def fake_mmdc(tmp_path):
    """Command that behaves like mmdc: writes FLOWCHART_SVG to the -o path."""
    return _write_script(tmp_path / "fake_mmdc.py", f"""\
        import sys
        args = sys.argv[1:]
        with open(args[args.index('-o') + 1], 'w', encoding='utf-8') as f:
            f.write({FLOWCHART_SVG!r})
        """)


@pytest.fixture
def failing_mmdc(tmp_path):
    """Command that fails like mmdc does on a syntax error."""
    return _write_script(tmp_path / "failing_mmdc.py", """\
        import sys
        sys.stderr.write('Parse error on line 2\\n')
        sys.exit(2)
        """)


@pytest.fixture
def silent_mmdc(tmp_path):
    """Command that exits cleanly without writing anything."""
    return _write_script(tmp_path / "silent_mmdc.py", "import sys\nsys.exit(0)\n")


@pytest.fixture
def mermaid_file(tmp_path):
    path = tmp_path / "flow.mmd"
    path.write_text("flowchart TD\n    A[Begin task] --> B{Ready?}\n    B ==>|yes| C((Done))\n", encoding='utf-8')
    return path


@pytest.fixture
def sleeping_mmdc(tmp_path):
    """Command that hangs well past any reasonable render time."""
    return _write_script(tmp_path / "sleeping_mmdc.py", "import time\ntime.sleep(30)\n")
