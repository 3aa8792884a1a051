"""
U-turn detection over adjacent cubic pairs.

Curves traced from thick strokes often end in a pair of quarter turns that
reverse the direction of travel. Visually these are a square end ("butt")
and can be replaced by a single line.
"""

from pathtidy.models import CubicPrimitive
from pathtidy.simplify.quadrants import quadrant_value
from pathtidy.tracer import get_tracer, trace


def is_antiparallel(sequence, i, j, angle_eps):
    """Are the lines at i and j antiparallel? False if either is not a line."""
    line_i = sequence.get_line(i)
    line_j = sequence.get_line(j)
    if line_i is None or line_j is None:
        return False
    return line_i.is_antiparallel_to(line_j, angle_eps)


def is_short(sequence, index, max_width):
    """Is the line at index strictly shorter than max_width?"""
    line = sequence.get_line(index)
    if line is None:
        return False
    return line.length() < max_width


def is_uturn(sequence, index, angle_eps):
    """
    Does the path turn through pi at the cubic pair (index, index + 1)?

    Three tests, any of which is enough:
    1. two quarter turns of the same sign;
    2. the lines either side of the pair are antiparallel;
    3. the pair is the last one and the line before it runs against the
       first line of the path.
    """
    turn = quadrant_value(sequence, index, angle_eps) + quadrant_value(sequence, index + 1, angle_eps)
    if abs(turn) == 2:
        return True

    if is_antiparallel(sequence, index - 1, index + 2, angle_eps):
        return True

    if index == sequence.size() - 2 and is_antiparallel(sequence, index - 1, 1, angle_eps):
        return True

    return False


@trace(label="get_uturn_list")
def get_uturn_list(sequence, angle_eps):
    """
    Ascending start indices of cubic pairs that form U-turns.
    """
    uturns = []
    for i in range(sequence.size() - 1):
        if not isinstance(sequence.get(i), CubicPrimitive):
            continue
        if not isinstance(sequence.get(i + 1), CubicPrimitive):
            continue
        if is_uturn(sequence, i, angle_eps):
            uturns.append(i)

    get_tracer().event(f"Found {len(uturns)} U-turns", level="DEBUG", indexes=uturns)
    return uturns
