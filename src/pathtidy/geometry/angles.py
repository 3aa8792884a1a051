"""Angle helpers shared by the primitive and segment geometry."""

import math

import numpy as np


TWO_PI = 2.0 * math.pi


def normalize_angle(angle):
    """Normalize an angle in radians into (-pi, pi]."""
    angle = math.fmod(angle, TWO_PI)
    if angle <= -math.pi:
        angle += TWO_PI
    elif angle > math.pi:
        angle -= TWO_PI
    return angle


def unit_vector(vector):
    """Return vector / |vector|, or None for a zero-length vector."""
    vector = np.asarray(vector, dtype=float)
    norm = np.linalg.norm(vector)
    if norm == 0.0:
        return None
    return vector / norm


def signed_angle_between(v0, v1):
    """
    Signed rotation taking direction v0 onto direction v1, in (-pi, pi].

    Returns None when either vector has zero length.
    """
    u0 = unit_vector(v0)
    u1 = unit_vector(v1)
    if u0 is None or u1 is None:
        return None
    cross = u0[0] * u1[1] - u0[1] * u1[0]
    dot = u0[0] * u1[0] + u0[1] * u1[1]
    return normalize_angle(math.atan2(cross, dot))


def unsigned_angle_between(v0, v1):
    """Angle in [0, pi] between two directions, None for zero vectors."""
    u0 = unit_vector(v0)
    u1 = unit_vector(v1)
    if u0 is None or u1 is None:
        return None
    return math.acos(float(np.clip(np.dot(u0, u1), -1.0, 1.0)))


def mean_angle(a0, a1):
    """Midpoint of the shorter rotation from a0 to a1, normalized."""
    return normalize_angle(a0 + normalize_angle(a1 - a0) / 2.0)
