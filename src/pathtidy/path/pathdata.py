"""
Path data codec.

Reads the subset of SVG path syntax that maps onto pathtidy primitives
(M, L, H, V, C, Z in absolute and relative form) and writes sequences back
as absolute commands.
"""

import re

from pathtidy.models import ClosePrimitive, CubicPrimitive, LinePrimitive, MovePrimitive
from pathtidy.shapes.base import format_coordinate
from pathtidy.tracer import get_tracer


TOKEN_PATTERN = re.compile(
    r"([A-Za-z])|([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
)

ARG_COUNTS = {"M": 2, "L": 2, "H": 1, "V": 1, "C": 6, "Z": 0}


def tokenize_path_data(d):
    """
    Split path data into (command, [args]) tuples.

    Raises ValueError on commands outside M/L/H/V/C/Z or stray characters.
    """
    commands = []
    position = 0
    for match in TOKEN_PATTERN.finditer(d):
        gap = d[position:match.start()]
        if gap.strip(" \t\r\n,"):
            raise ValueError(f"Unexpected characters in path data: {gap.strip()!r}")
        position = match.end()

        letter, number = match.groups()
        if letter:
            if letter.upper() not in ARG_COUNTS:
                raise ValueError(f"Unsupported path command: {letter}")
            commands.append((letter, []))
        else:
            if not commands:
                raise ValueError("Path data must start with a command")
            commands[-1][1].append(float(number))

    if d[position:].strip(" \t\r\n,"):
        raise ValueError(f"Unexpected characters in path data: {d[position:].strip()!r}")

    return commands


def parse_path_data(d):
    """
    Build a PrimitiveSequence from path data.

    Repeated argument groups repeat the command; extra pairs after a move
    become lines. A trailing Z marks the sequence closed.
    """
    from pathtidy.path.sequence import PrimitiveSequence

    primitives = []
    current = [0.0, 0.0]
    subpath_start = [0.0, 0.0]

    for cmd, args in tokenize_path_data(d):
        upper = cmd.upper()
        relative = cmd != upper
        count = ARG_COUNTS[upper]

        if upper == "Z":
            if args:
                raise ValueError("Z takes no arguments")
            primitives.append(ClosePrimitive(last=list(subpath_start)))
            current = list(subpath_start)
            continue

        if not args or len(args) % count:
            raise ValueError(f"Command {cmd} expects a multiple of {count} arguments, got {len(args)}")

        for group_index in range(0, len(args), count):
            group = args[group_index:group_index + count]
            base_x, base_y = current if relative else (0.0, 0.0)

            if upper == "M" and group_index == 0:
                current = [base_x + group[0], base_y + group[1]]
                subpath_start = list(current)
                primitives.append(MovePrimitive(last=list(current)))
            elif upper in ("M", "L"):
                current = [base_x + group[0], base_y + group[1]]
                primitives.append(LinePrimitive(last=list(current)))
            elif upper == "H":
                current = [base_x + group[0], current[1]]
                primitives.append(LinePrimitive(last=list(current)))
            elif upper == "V":
                current = [current[0], base_y + group[0]]
                primitives.append(LinePrimitive(last=list(current)))
            else:
                control1 = [base_x + group[0], base_y + group[1]]
                control2 = [base_x + group[2], base_y + group[3]]
                current = [base_x + group[4], base_y + group[5]]
                primitives.append(CubicPrimitive(control1=control1, control2=control2, last=list(current)))

    closed = bool(primitives) and isinstance(primitives[-1], ClosePrimitive)
    sequence = PrimitiveSequence(primitives, closed=closed)

    get_tracer().event(f"Parsed {len(sequence)} primitives", level="DEBUG")
    return sequence


def to_path_data(sequence, precision=None):
    """
    Absolute path data for a sequence.

    precision=None keeps full float precision; otherwise coordinates are
    rounded to that many decimals. A sequence that does not start with a
    move gets one at its first primitive's start point when it is known.
    """
    def fmt(point):
        return f"{format_coordinate(point[0], precision)} {format_coordinate(point[1], precision)}"

    parts = []
    for index, primitive in enumerate(sequence):
        if index == 0 and not isinstance(primitive, MovePrimitive) and primitive.first is not None:
            parts.append(f"M {fmt(primitive.first)}")

        if isinstance(primitive, ClosePrimitive):
            parts.append("Z")
        elif isinstance(primitive, CubicPrimitive):
            parts.append(f"C {fmt(primitive.control1)} {fmt(primitive.control2)} {fmt(primitive.last)}")
        else:
            parts.append(f"{primitive.COMMAND} {fmt(primitive.last)}")

    return " ".join(parts)
