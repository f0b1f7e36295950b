"""
SVG path data tokenizer for the connector paths Mermaid draws.

Only absolute move/line and cubic-curve commands produce waypoints. The
remaining command letters are recognised so they split the path data
correctly, but they contribute nothing to the reconstructed route.
"""

import math
import re
from typing import Callable, NamedTuple, Optional

from .graph import Point

COMMAND_LETTERS = frozenset("MLHVCSQTAZmlhvcsqtaz")

_ARG_SPLIT_RE = re.compile(r"[\s,]+")


class CommandHandler(NamedTuple):
    arg_count: int
    waypoint: Callable[[list], Point]


def _endpoint(x_index: int, y_index: int) -> Callable[[list], Point]:
    def pick(args: list) -> Point:
        return Point(x=args[x_index], y=args[y_index])
    return pick


HANDLERS: dict[str, CommandHandler] = {
    "M": CommandHandler(2, _endpoint(0, 1)),
    "L": CommandHandler(2, _endpoint(0, 1)),
    # control points are dropped, only the curve endpoint is kept
    "C": CommandHandler(6, _endpoint(4, 5)),
}


def _to_number(token: str) -> float:
    try:
        return float(token)
    except ValueError:
        return math.nan


def _parse_args(body: str) -> list[float]:
    tokens = _ARG_SPLIT_RE.split(body.strip())
    return [_to_number(t) for t in tokens if t]


def tokenize(d: str) -> list[tuple[str, list[float]]]:
    """Split path data into (command, arguments) groups.

    Text before the first command letter is ignored.
    """
    groups = []
    command: Optional[str] = None
    start = 0
    for i, ch in enumerate(d or ""):
        if ch in COMMAND_LETTERS:
            if command is not None:
                groups.append((command, _parse_args(d[start:i])))
            command = ch
            start = i + 1
    if command is not None:
        groups.append((command, _parse_args(d[start:])))
    return groups


def waypoints(d: str) -> list[Point]:
    """Reconstruct the waypoints of a path, in draw order."""
    points = []
    for command, args in tokenize(d):
        handler = HANDLERS.get(command)
        if handler is None:
            continue
        # missing arguments read as NaN rather than failing the whole edge
        padded = args + [math.nan] * (handler.arg_count - len(args))
        points.append(handler.waypoint(padded))
    return points
