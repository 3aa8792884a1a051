"""
Circular arcs matched to cubic Bezier primitives.

A cubic is represented by the circle through its start point, its point at
t = 0.5 and its end point. Arcs can be averaged and turned back into cubics,
which is how two near-duplicate curves are merged into one.
"""

import math

import numpy as np

from pathtidy.geometry.angles import mean_angle, normalize_angle
from pathtidy.models import CubicPrimitive


# Relative determinant below which three points count as collinear
COLLINEAR_TOLERANCE = 1e-9


def evaluate_cubic(p0, p1, p2, p3, t):
    """Evaluate a cubic Bezier at parameter t."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=float) for p in (p0, p1, p2, p3))
    mt = 1.0 - t
    return mt ** 3 * p0 + 3 * mt ** 2 * t * p1 + 3 * mt * t ** 2 * p2 + t ** 3 * p3


def circumcenter(a, b, c):
    """
    Centre of the circle through three points, None if they are collinear.
    """
    a, b, c = (np.asarray(p, dtype=float) for p in (a, b, c))
    matrix = 2.0 * np.array([b - a, c - a])
    rhs = np.array([np.dot(b, b) - np.dot(a, a), np.dot(c, c) - np.dot(a, a)])

    scale = max(float(np.abs(matrix).max()), 1.0)
    if abs(np.linalg.det(matrix)) < COLLINEAR_TOLERANCE * scale * scale:
        return None
    return np.linalg.solve(matrix, rhs)


class Arc:
    """Circular arc: centre, radius, start angle and signed sweep."""

    def __init__(self, center, radius, start_angle, sweep):
        self.center = [float(center[0]), float(center[1])]
        self.radius = float(radius)
        self.start_angle = normalize_angle(start_angle)
        self.sweep = float(sweep)

    def __repr__(self):
        return (
            f"Arc(center={self.center}, radius={self.radius:.6g}, "
            f"start={self.start_angle:.6g}, sweep={self.sweep:.6g})"
        )

    @classmethod
    def from_points(cls, p0, p1, p2, p3):
        """Arc matching the cubic with the given points, None if it is straight."""
        mid = evaluate_cubic(p0, p1, p2, p3, 0.5)
        center = circumcenter(p0, mid, p3)
        if center is None:
            return None

        p0 = np.asarray(p0, dtype=float)
        p3 = np.asarray(p3, dtype=float)
        radius = float(np.linalg.norm(p0 - center))

        a0 = math.atan2(p0[1] - center[1], p0[0] - center[0])
        am = math.atan2(mid[1] - center[1], mid[0] - center[0])
        a3 = math.atan2(p3[1] - center[1], p3[0] - center[0])
        sweep = normalize_angle(am - a0) + normalize_angle(a3 - am)

        return cls(center, radius, a0, sweep)

    @classmethod
    def from_cubic(cls, cubic):
        if cubic is None or cubic.first is None:
            return None
        return cls.from_points(cubic.first, cubic.control1, cubic.control2, cubic.last)

    @property
    def end_angle(self):
        return normalize_angle(self.start_angle + self.sweep)

    def point_at_angle(self, angle):
        return [
            self.center[0] + self.radius * math.cos(angle),
            self.center[1] + self.radius * math.sin(angle),
        ]

    def start_point(self):
        return self.point_at_angle(self.start_angle)

    def end_point(self):
        return self.point_at_angle(self.start_angle + self.sweep)

    def reversed(self):
        return Arc(self.center, self.radius, self.start_angle + self.sweep, -self.sweep)

    def calculate_mean_arc(self, other):
        """
        Average centre, radius, start angle and sweep of two arcs.

        The other arc is reversed first when it runs the opposite way,
        i.e. when its start lies nearer to this arc's end than to its start.
        """
        start = np.array(self.start_point())
        end = np.array(self.end_point())
        other_start = np.array(other.start_point())
        if np.linalg.norm(other_start - end) < np.linalg.norm(other_start - start):
            other = other.reversed()

        center = [
            (self.center[0] + other.center[0]) / 2.0,
            (self.center[1] + other.center[1]) / 2.0,
        ]
        return Arc(
            center,
            (self.radius + other.radius) / 2.0,
            mean_angle(self.start_angle, other.start_angle),
            (self.sweep + other.sweep) / 2.0,
        )

    def control_points(self):
        """(p0, c1, c2, p3) of the single cubic approximating this arc."""
        a0 = self.start_angle
        a1 = self.start_angle + self.sweep
        k = 4.0 / 3.0 * math.tan(self.sweep / 4.0) * self.radius

        p0 = self.point_at_angle(a0)
        p3 = self.point_at_angle(a1)
        c1 = [p0[0] - k * math.sin(a0), p0[1] + k * math.cos(a0)]
        c2 = [p3[0] + k * math.sin(a1), p3[1] - k * math.cos(a1)]
        return p0, c1, c2, p3

    def to_cubic(self):
        p0, c1, c2, p3 = self.control_points()
        return CubicPrimitive(first=p0, control1=c1, control2=c2, last=p3)

    def to_reverse_cubic(self):
        p0, c1, c2, p3 = self.control_points()
        return CubicPrimitive(first=p3, control1=c2, control2=c1, last=p0)
