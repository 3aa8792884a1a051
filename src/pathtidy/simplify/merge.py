"""
Merge operations on primitive sequences.

Replaces U-turns by straight butts, averages near-duplicate lines and
curves, and recognises the thin "moveto + 4 lines" outline that should be a
single line.

Operations that need primitives of a given kind treat a mismatch as a
contract violation: the sequence is left untouched and the call returns
None after reporting the problem, or raises PreconditionError when strict.
"""

import math

from pathtidy.geometry.arcs import Arc
from pathtidy.geometry.lines import Segment
from pathtidy.models import LinePrimitive, PreconditionError
from pathtidy.simplify.uturns import is_antiparallel, is_short
from pathtidy.tracer import get_tracer, trace


def _precondition_failed(message, strict):
    if strict:
        raise PreconditionError(message)
    get_tracer().event(message, level="ERROR")
    return None


@trace(label="replace_uturn_by_butt")
def replace_uturn_by_butt(sequence, index, strict=False):
    """
    Replace the cubic pair (index, index + 1) by one line.

    The line runs from the end of the primitive before index to the end of
    the second cubic. Index + 1 is removed before index so the second
    removal still addresses the right primitive.

    Returns:
        the new LinePrimitive, or None if the pair is not two cubics
    """
    cubic0 = sequence.get_cubic_primitive(index)
    cubic1 = sequence.get_cubic_primitive(index + 1)
    if cubic0 is None or cubic1 is None:
        return _precondition_failed(f"No cubic pair at {index}, {index + 1}", strict)

    line = LinePrimitive(last=list(cubic1.last))
    sequence.remove_at(index + 1)
    sequence.remove_at(index)
    sequence.insert(index, line)

    get_tracer().event(f"Replaced U-turn at {index} by butt", level="DEBUG")
    return line


def calculate_mean_line(line0, line1):
    """
    Segment through the midpoints of corresponding endpoints.

    line1 is paired end-to-start when it runs opposite to line0, which is
    the usual case for the two sides of a thin stroke; start-to-start
    otherwise.
    """
    a0, a1 = line0.first, line0.last
    b0, b1 = line1.first, line1.last

    same_cost = math.dist(a0, b0) + math.dist(a1, b1)
    reversed_cost = math.dist(a0, b1) + math.dist(a1, b0)
    if reversed_cost <= same_cost:
        b0, b1 = b1, b0

    start = [(a0[0] + b0[0]) / 2.0, (a0[1] + b0[1]) / 2.0]
    end = [(a1[0] + b1[0]) / 2.0, (a1[1] + b1[1]) / 2.0]
    return Segment(start, end)


@trace(label="create_mean_line")
def create_mean_line(sequence, i, j, strict=False):
    """
    Overwrite lines i and j with their mean line.

    Line i receives the mean in its own direction, line j the reversed mean.

    Returns:
        the mean Segment, or None if either index is not a line
    """
    line_i = sequence.get_line_primitive(i)
    line_j = sequence.get_line_primitive(j)
    if line_i is None or line_j is None:
        return _precondition_failed(f"Mean line needs lines at {i} and {j}", strict)
    if line_i.first is None or line_j.first is None:
        get_tracer().event(f"Mean line skipped: start point unknown at {i} or {j}", level="WARN")
        return None

    mean = calculate_mean_line(line_i, line_j)
    sequence.replace_coordinates(i, LinePrimitive(first=mean.start, last=mean.end))
    sequence.replace_coordinates(j, LinePrimitive(first=mean.end, last=mean.start))
    return mean


@trace(label="create_mean_cubic")
def create_mean_cubic(sequence, i, j, strict=False):
    """
    Overwrite cubics i and j with the cubic of their mean arc.

    Each curve is matched to a circular arc; the arcs' centre, radius,
    start angle and sweep are averaged. Cubic j receives the reversed curve.

    Returns:
        the mean Arc, or None if either index is not a cubic or either
        curve is straight
    """
    cubic_i = sequence.get_cubic_primitive(i)
    cubic_j = sequence.get_cubic_primitive(j)
    if cubic_i is None or cubic_j is None:
        return _precondition_failed(f"Mean cubic needs cubics at {i} and {j}", strict)

    arc_i = Arc.from_cubic(cubic_i)
    arc_j = Arc.from_cubic(cubic_j)
    if arc_i is None or arc_j is None:
        get_tracer().event(f"Mean cubic skipped: no arc for {i} or {j}", level="DEBUG")
        return None

    mean_arc = arc_i.calculate_mean_arc(arc_j)
    sequence.replace_coordinates(i, mean_arc.to_cubic())
    sequence.replace_coordinates(j, mean_arc.to_reverse_cubic())
    return mean_arc


def _create_line_from_midpoints(sequence, i, j):
    line_i = sequence.get_line(i)
    line_j = sequence.get_line(j)
    if line_i is None or line_j is None:
        return None
    return Segment(line_i.midpoint(), line_j.midpoint())


@trace(label="create_line_from_mllll")
def create_line_from_mllll(sequence, angle_eps, max_width):
    """
    Centre line of a thin "moveto + 4 lines" outline.

    If lines 1 and 3 run against each other and lines 2 and 4 are short
    ends, the result joins the midpoints of 2 and 4; failing that, the same
    test with the roles swapped joins the midpoints of 1 and 3. When both
    hold, the first wins. The sequence itself is not modified.

    Returns:
        Segment, or None when the outline is not a thin zig-zag
    """
    if (is_antiparallel(sequence, 1, 3, angle_eps)
            and is_short(sequence, 2, max_width) and is_short(sequence, 4, max_width)):
        return _create_line_from_midpoints(sequence, 2, 4)

    if (is_antiparallel(sequence, 2, 4, angle_eps)
            and is_short(sequence, 1, max_width) and is_short(sequence, 3, max_width)):
        return _create_line_from_midpoints(sequence, 1, 3)

    return None
