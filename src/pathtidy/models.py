"""
Pydantic data models for pathtidy.

Path primitives form a closed set of variants tagged by ``kind``; code that
consumes them dispatches on the kind and treats anything unexpected as
"not applicable". Reports produced by the pipeline live here as well.
"""

import math
from enum import Enum
from typing import Annotated, ClassVar, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from pathtidy.geometry.angles import normalize_angle, signed_angle_between


Point = Annotated[List[float], Field(min_length=2, max_length=2)]


class PreconditionError(ValueError):
    """A merge operation was called on primitives of the wrong kind."""


class PrimitiveKind(str, Enum):
    """Kinds of path primitive."""
    MOVE = "move"
    LINE = "line"
    CUBIC = "cubic"
    CLOSE = "close"


class PathPrimitive(BaseModel):
    """
    Common behaviour of all primitives.

    ``last`` is always defined. ``first`` belongs to the owning sequence,
    which copies the previous primitive's ``last`` into it.
    """
    COMMAND: ClassVar[str] = ""

    first: Optional[Point] = None
    last: Point

    model_config = ConfigDict(extra="forbid")

    def angle(self):
        """Turning angle in radians; only cubics turn."""
        return None

    def length(self):
        """Chord length from first to last, None while first is unknown."""
        if self.first is None:
            return None
        return math.hypot(self.last[0] - self.first[0], self.last[1] - self.first[1])

    def coord_array(self):
        """Points owned by this primitive, excluding ``first``."""
        return [list(self.last)]

    def set_coord_array(self, points):
        self.last = list(points[-1])

    def reversed(self):
        """The same primitive walked backwards, None where that has no meaning."""
        return None


class MovePrimitive(PathPrimitive):
    """Pen move to ``last`` without drawing."""
    COMMAND: ClassVar[str] = "M"
    kind: Literal[PrimitiveKind.MOVE] = PrimitiveKind.MOVE


class LinePrimitive(PathPrimitive):
    """Straight line from ``first`` to ``last``."""
    COMMAND: ClassVar[str] = "L"
    kind: Literal[PrimitiveKind.LINE] = PrimitiveKind.LINE

    def reversed(self):
        if self.first is None:
            return None
        return LinePrimitive(first=list(self.last), last=list(self.first))


class CubicPrimitive(PathPrimitive):
    """Cubic Bezier from ``first`` to ``last`` with two control points."""
    COMMAND: ClassVar[str] = "C"
    kind: Literal[PrimitiveKind.CUBIC] = PrimitiveKind.CUBIC
    control1: Point
    control2: Point

    def start_tangent(self):
        # Coincident control points fall back to the next distinct point
        for point in (self.control1, self.control2, self.last):
            vector = (point[0] - self.first[0], point[1] - self.first[1])
            if vector != (0.0, 0.0):
                return vector
        return None

    def end_tangent(self):
        for point in (self.control2, self.control1, self.first):
            vector = (self.last[0] - point[0], self.last[1] - point[1])
            if vector != (0.0, 0.0):
                return vector
        return None

    def angle(self):
        """
        Signed rotation from the start tangent to the end tangent.

        A quarter circle turns through +-pi/2. None while ``first`` is
        unknown or the curve collapses to a point.
        """
        if self.first is None:
            return None
        t0 = self.start_tangent()
        t1 = self.end_tangent()
        if t0 is None or t1 is None:
            return None
        angle = signed_angle_between(t0, t1)
        return None if angle is None else normalize_angle(angle)

    def coord_array(self):
        return [list(self.control1), list(self.control2), list(self.last)]

    def set_coord_array(self, points):
        self.control1 = list(points[0])
        self.control2 = list(points[1])
        self.last = list(points[2])

    def reversed(self):
        if self.first is None:
            return None
        return CubicPrimitive(
            first=list(self.last),
            control1=list(self.control2),
            control2=list(self.control1),
            last=list(self.first),
        )


class ClosePrimitive(PathPrimitive):
    """Close the subpath; ``last`` is the subpath start point."""
    COMMAND: ClassVar[str] = "Z"
    kind: Literal[PrimitiveKind.CLOSE] = PrimitiveKind.CLOSE


Primitive = Annotated[
    Union[MovePrimitive, LinePrimitive, CubicPrimitive, ClosePrimitive],
    Field(discriminator="kind"),
]

_primitive_list_adapter = TypeAdapter(List[Primitive])


def primitives_from_data(data):
    """Validate a list of primitive dicts (e.g. loaded from JSON)."""
    return _primitive_list_adapter.validate_python(data)


def primitives_to_data(primitives):
    return _primitive_list_adapter.dump_python(list(primitives), mode="json")


class SimplifyReport(BaseModel):
    """What a simplification pass did to one path."""
    primitives_before: int
    primitives_after: int
    uturns_found: List[int] = Field(default_factory=list)
    uturns_replaced: int = 0
    zigzag_collapsed: bool = False

    model_config = ConfigDict(extra="forbid")

    @property
    def changed(self):
        return self.uturns_replaced > 0 or self.zigzag_collapsed


class BatchResult(BaseModel):
    """Result of simplifying and deduplicating a batch of paths."""
    paths: List[str] = Field(default_factory=list)
    reports: List[SimplifyReport] = Field(default_factory=list)
    duplicates_removed: int = 0

    model_config = ConfigDict(extra="forbid")
