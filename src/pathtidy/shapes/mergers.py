"""
Element merging.

A merger holds one element and a tolerance, and tries to combine another
element with it into a single new element.
"""

from abc import ABC, abstractmethod

from pathtidy.geometry.lines import Segment


class ElementMerger(ABC):
    """Base class for merging two elements."""

    def __init__(self, element, eps):
        self.element = element
        self.eps = eps

    @abstractmethod
    def create_new_element(self, other):
        """
        Merge other into the held element.

        Returns:
            a new element, or None if the two cannot be merged
        """


class SegmentMerger(ElementMerger):
    """
    Merges collinear segments that touch or overlap.

    The merged segment spans both inputs and keeps the direction of the
    held segment.
    """

    def create_new_element(self, other):
        segment = self.element
        if not isinstance(other, Segment):
            return None
        length = segment.length()
        if length == 0.0:
            return None

        if segment.distance_to_point(other.start) > self.eps:
            return None
        if segment.distance_to_point(other.end) > self.eps:
            return None

        t0 = segment.project(other.start)
        t1 = segment.project(other.end)
        low, high = min(t0, t1), max(t0, t1)
        slack = self.eps / length
        if high < -slack or low > 1.0 + slack:
            return None

        return Segment(segment.point_at(min(0.0, low)), segment.point_at(max(1.0, high)))


def merge_segments(segments, eps):
    """
    Repeatedly merge collinear touching segments.

    Returns a new list; segments that merge with nothing are kept as they
    are, in their input order.
    """
    pending = list(segments)
    merged = []
    while pending:
        current = pending.pop(0)
        changed = True
        while changed:
            changed = False
            for i, other in enumerate(pending):
                combined = SegmentMerger(current, eps).create_new_element(other)
                if combined is not None:
                    current = combined
                    pending.pop(i)
                    changed = True
                    break
        merged.append(current)
    return merged
