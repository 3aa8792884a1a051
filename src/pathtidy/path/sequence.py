"""
Ordered, mutable container of path primitives.

The sequence owns the continuity invariant: every primitive's ``first`` is
the previous primitive's ``last``. Index lookups never raise; an index
outside the sequence simply has no primitive.
"""

from pathtidy.geometry.angles import normalize_angle
from pathtidy.geometry.lines import Segment
from pathtidy.models import CubicPrimitive, ClosePrimitive, LinePrimitive


class PrimitiveSequence:
    """Primitives in drawing order plus a closed flag."""

    def __init__(self, primitives=None, closed=False):
        self._items = []
        self.closed = closed
        if primitives:
            self.insert_all(primitives)

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self):
        return f"PrimitiveSequence({self.to_path_data()!r}, closed={self.closed})"

    def size(self):
        return len(self._items)

    def kinds(self):
        return [p.kind.value for p in self._items]

    def append(self, primitive):
        self._items.append(primitive)
        self.propagate_first_points()

    def insert_all(self, primitives):
        self._items.extend(primitives)
        self.propagate_first_points()

    def insert(self, index, primitive):
        self._items.insert(index, primitive)
        self.propagate_first_points()

    def replace_all(self, primitives):
        self._items = list(primitives)
        self.propagate_first_points()

    def propagate_first_points(self):
        """
        Set each primitive's first point to the previous primitive's last.

        If the final primitive is a close, the first primitive starts where
        the primitive before the close ends; otherwise a closed sequence
        wraps from its final primitive. Idempotent.
        """
        items = self._items
        nprim = len(items)
        if nprim == 0:
            return

        for i in range(1, nprim):
            items[i].first = list(items[i - 1].last)

        if nprim > 1:
            if isinstance(items[-1], ClosePrimitive):
                items[0].first = list(items[-2].last)
            elif self.closed:
                items[0].first = list(items[-1].last)

    def get(self, index):
        """Primitive at index, or None outside [0, n)."""
        if index < 0 or index >= len(self._items):
            return None
        return self._items[index]

    def remove_at(self, index):
        """Remove and return the primitive at index; None if absent."""
        if self.get(index) is None:
            return None
        return self._items.pop(index)

    def angle_at(self, index):
        """Turning angle of the primitive at index in (-pi, pi], or None."""
        primitive = self.get(index)
        if primitive is None:
            return None
        angle = primitive.angle()
        return None if angle is None else normalize_angle(angle)

    def get_line_primitive(self, index):
        primitive = self.get(index)
        return primitive if isinstance(primitive, LinePrimitive) else None

    def get_cubic_primitive(self, index):
        primitive = self.get(index)
        return primitive if isinstance(primitive, CubicPrimitive) else None

    def get_line(self, index):
        """
        Line primitive at index as a Segment from the previous end point.

        None for index <= 0 or when the primitive is not a line.
        """
        if index <= 0:
            return None
        primitive = self.get_line_primitive(index)
        if primitive is None:
            return None
        return Segment(self._items[index - 1].last, primitive.last)

    def replace_coordinates(self, index, template):
        """
        Copy coordinates from template into the primitive at index.

        Only applies when both are the same kind; returns whether the
        primitive changed. Continuity is re-established afterwards.
        """
        primitive = self.get(index)
        if primitive is None or primitive.kind != template.kind:
            return False
        if template.first is not None:
            primitive.first = list(template.first)
        primitive.set_coord_array(template.coord_array())
        self.propagate_first_points()
        return True

    def bounding_box(self):
        """Bounding box over end and control points, None when empty."""
        points = []
        for primitive in self._items:
            if primitive.first is not None:
                points.append(primitive.first)
            points.extend(primitive.coord_array())
        if not points:
            return None
        xs = [p[0] for p in points]
        ys = [p[1] for p in points]
        return [min(xs), min(ys), max(xs), max(ys)]

    def copy(self):
        return PrimitiveSequence([p.model_copy(deep=True) for p in self._items], closed=self.closed)

    def to_path_data(self, precision=None):
        """Path data string for serializers."""
        from pathtidy.path.pathdata import to_path_data
        return to_path_data(self, precision=precision)
