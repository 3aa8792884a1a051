"""
Shape contract for geometric deduplication.

A shape knows a position-only signature and how to compare itself with
another shape within a tolerance. Display attributes never take part.
"""

from abc import ABC, abstractmethod


class Shape(ABC):
    """Base class for anything the deduplicator can compare."""

    @abstractmethod
    def geometric_hash(self):
        """
        String that defines the geometric position without attributes.

        Fairly crude: identical strings mean identical coordinates, so it
        only finds exact duplicates.
        """

    @abstractmethod
    def is_geometrically_equal_to(self, other, epsilon):
        """
        Are the two shapes equal within epsilon? Must be symmetric.

        Shapes of an incompatible kind are never equal.
        """

    @abstractmethod
    def bounding_box(self):
        """[min_x, min_y, max_x, max_y], or None when the shape is empty."""

    def signature(self):
        return self.geometric_hash()

    def is_zero_dimensional(self):
        """True when the shape has no extent in either direction."""
        bbox = self.bounding_box()
        return bbox is None or (bbox[2] - bbox[0] == 0.0 and bbox[3] - bbox[1] == 0.0)


def points_within(p0, p1, epsilon):
    """Coordinate-wise comparison of two [x, y] points."""
    return abs(p0[0] - p1[0]) <= epsilon and abs(p0[1] - p1[1]) <= epsilon


def format_coordinate(value, precision=None):
    """
    Format a coordinate for hashes and path data.

    precision=None gives the shortest repr that round-trips the float.
    """
    if precision is not None:
        text = f"{value:.{precision}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
        return "0" if text in ("-0", "") else text
    text = repr(float(value))
    if text.endswith(".0"):
        text = text[:-2]
    return "0" if text == "-0" else text
