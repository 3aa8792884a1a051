"""Shape wrapper around a primitive sequence."""

from pathtidy.shapes.base import Shape, points_within


class PathShape(Shape):
    """
    A path as a shape.

    Two paths are equal when they have the same primitive kinds in the
    same order and every coordinate agrees within epsilon.
    """

    def __init__(self, sequence, path_id=None):
        self.sequence = sequence
        self.path_id = path_id

    def __repr__(self):
        return f"PathShape({self.path_id!r}, {self.geometric_hash()!r})"

    def geometric_hash(self):
        return self.sequence.to_path_data()

    def is_geometrically_equal_to(self, other, epsilon):
        if not isinstance(other, PathShape):
            return False
        if len(self.sequence) != len(other.sequence):
            return False

        for mine, theirs in zip(self.sequence, other.sequence):
            if mine.kind != theirs.kind:
                return False
            if (mine.first is None) != (theirs.first is None):
                return False
            if mine.first is not None and not points_within(mine.first, theirs.first, epsilon):
                return False
            for p0, p1 in zip(mine.coord_array(), theirs.coord_array()):
                if not points_within(p0, p1, epsilon):
                    return False
        return True

    def bounding_box(self):
        return self.sequence.bounding_box()
