"""
Quadrant classification of cubic primitives.

A cubic whose tangent turns through nearly a right angle is a "quadrant".
Two same-signed quadrants in a row read as a sharp reversal rather than a
smooth curve.
"""

import math

from pathtidy.geometry.arcs import Arc
from pathtidy.models import CubicPrimitive


def quadrant_value(sequence, index, angle_eps):
    """
    Classify the primitive at index.

    Args:
        sequence: PrimitiveSequence
        index: primitive index
        angle_eps: max deviation from pi/2, in radians

    Returns:
        1 for a pi/2 turn, -1 for a -pi/2 turn, else 0 (also for
        non-cubics and missing indices)
    """
    if not isinstance(sequence.get(index), CubicPrimitive):
        return 0
    angle = sequence.angle_at(index)
    if angle is None:
        return 0

    delta = abs(abs(angle) - math.pi / 2.0)
    if delta < angle_eps:
        return 1 if angle > math.pi / 4.0 else -1
    return 0


def get_quadrant_arc(sequence, index, angle_eps):
    """Arc for the cubic at index if it classifies as a quadrant, else None."""
    if quadrant_value(sequence, index, angle_eps) == 0:
        return None
    return Arc.from_cubic(sequence.get_cubic_primitive(index))
