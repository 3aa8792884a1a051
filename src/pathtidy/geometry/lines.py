"""
Directed line segments.

A Segment is the line implied by two consecutive path points. It is also a
Shape, so standalone lines can be deduplicated like paths.
"""

import math

import numpy as np

from pathtidy.geometry.angles import unsigned_angle_between
from pathtidy.shapes.base import Shape, format_coordinate, points_within


class Segment(Shape):
    """Directed segment from start to end."""

    def __init__(self, start, end):
        self.start = [float(start[0]), float(start[1])]
        self.end = [float(end[0]), float(end[1])]

    def __repr__(self):
        return f"Segment({self.start}, {self.end})"

    @property
    def vector(self):
        return np.array(self.end) - np.array(self.start)

    def length(self):
        return float(np.linalg.norm(self.vector))

    def midpoint(self):
        return [(self.start[0] + self.end[0]) / 2.0, (self.start[1] + self.end[1]) / 2.0]

    def direction(self):
        """Direction angle in (-pi, pi], None for a zero-length segment."""
        if self.length() == 0.0:
            return None
        dx, dy = self.vector
        return math.atan2(dy, dx)

    def reversed(self):
        return Segment(self.end, self.start)

    def is_antiparallel_to(self, other, angle_eps):
        """
        True when the direction vectors point within angle_eps of opposite.

        Zero-length segments have no direction and are never antiparallel.
        """
        angle = unsigned_angle_between(self.vector, other.vector)
        if angle is None:
            return False
        return abs(angle - math.pi) < angle_eps

    def is_parallel_to(self, other, angle_eps):
        angle = unsigned_angle_between(self.vector, other.vector)
        if angle is None:
            return False
        return angle < angle_eps

    def distance_to_point(self, point):
        """Perpendicular distance from point to the infinite line."""
        length = self.length()
        offset = np.array(point, dtype=float) - np.array(self.start)
        if length == 0.0:
            return float(np.linalg.norm(offset))
        dx, dy = self.vector
        return abs(dx * offset[1] - dy * offset[0]) / length

    def project(self, point):
        """Parameter t of point projected onto the line (0 at start, 1 at end)."""
        vector = self.vector
        denom = float(np.dot(vector, vector))
        if denom == 0.0:
            return 0.0
        return float(np.dot(np.array(point, dtype=float) - np.array(self.start), vector)) / denom

    def point_at(self, t):
        return (np.array(self.start) + t * self.vector).tolist()

    def geometric_hash(self):
        coords = ",".join(format_coordinate(v) for v in self.start + self.end)
        return f"line({coords})"

    def is_geometrically_equal_to(self, other, epsilon):
        """Same endpoints within epsilon, in either order."""
        if not isinstance(other, Segment):
            return False
        if points_within(self.start, other.start, epsilon) and points_within(self.end, other.end, epsilon):
            return True
        return points_within(self.start, other.end, epsilon) and points_within(self.end, other.start, epsilon)

    def bounding_box(self):
        return [
            min(self.start[0], self.end[0]),
            min(self.start[1], self.end[1]),
            max(self.start[0], self.end[0]),
            max(self.start[1], self.end[1]),
        ]
