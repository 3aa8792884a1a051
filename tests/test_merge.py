"""Tests for butt replacement, mean lines, mean cubics and zig-zag outlines."""

import math

import pytest

from pathtidy.models import CubicPrimitive, LinePrimitive, MovePrimitive, PreconditionError
from pathtidy.path.pathdata import parse_path_data
from pathtidy.path.sequence import PrimitiveSequence
from pathtidy.simplify.merge import (
    calculate_mean_line, create_line_from_mllll, create_mean_cubic, create_mean_line,
    replace_uturn_by_butt,
)


EPS = math.radians(5)


@pytest.fixture
def opposite_arcs_sequence():
    """Quarter circle of radius 10 and one of radius 12 running the other way."""
    return PrimitiveSequence([
        MovePrimitive(last=[10, 0]),
        CubicPrimitive(control1=[10, 5.5228], control2=[5.5228, 10], last=[0, 10]),
        MovePrimitive(last=[0, 12]),
        CubicPrimitive(control1=[6.6274, 12], control2=[12, 6.6274], last=[12, 0]),
    ])


class TestButt:
    """Tests for replace_uturn_by_butt."""

    def test_replaces_pair_by_line(self, uturn_sequence):
        line = replace_uturn_by_butt(uturn_sequence, 2)

        assert isinstance(line, LinePrimitive)
        assert line.first == [10, 0]
        assert line.last == [10, 10]
        assert len(uturn_sequence) == 4
        assert uturn_sequence.to_path_data() == "M 0 0 L 10 0 L 10 10 L 0 10"

    def test_continuity_after_replacement(self, uturn_sequence):
        replace_uturn_by_butt(uturn_sequence, 2)
        assert uturn_sequence[3].first == [10, 10]

    def test_not_a_cubic_pair(self, uturn_sequence):
        before = uturn_sequence.to_path_data()
        assert replace_uturn_by_butt(uturn_sequence, 1) is None
        assert uturn_sequence.to_path_data() == before

    def test_not_a_cubic_pair_strict(self, uturn_sequence):
        with pytest.raises(PreconditionError):
            replace_uturn_by_butt(uturn_sequence, 3, strict=True)

    def test_precondition_error_is_value_error(self, uturn_sequence):
        with pytest.raises(ValueError):
            replace_uturn_by_butt(uturn_sequence, 0, strict=True)


class TestMeanLine:
    """Tests for mean lines."""

    def test_calculate_pairs_opposite_ends(self):
        mean = calculate_mean_line(
            LinePrimitive(first=[0, 0], last=[10, 0]),
            LinePrimitive(first=[10, 2], last=[0, 2]),
        )
        assert mean.start == pytest.approx([0, 1])
        assert mean.end == pytest.approx([10, 1])

    def test_calculate_pairs_same_direction(self):
        mean = calculate_mean_line(
            LinePrimitive(first=[0, 0], last=[10, 0]),
            LinePrimitive(first=[0, 4], last=[10, 4]),
        )
        assert mean.start == pytest.approx([0, 2])
        assert mean.end == pytest.approx([10, 2])

    def test_create_mean_line(self):
        sequence = parse_path_data("M 0 0 L 10 0 L 10 2 L 0 2")
        mean = create_mean_line(sequence, 1, 3)

        assert mean.start == pytest.approx([0, 1])
        assert mean.reversed().start == pytest.approx([10, 1])
        assert mean.reversed().end == pytest.approx([0, 1])
        assert sequence[1].last == pytest.approx([10, 1])
        assert sequence[3].last == pytest.approx([0, 1])
        assert sequence[2].first == sequence[1].last

    def test_wrong_kind_leaves_sequence(self, uturn_sequence):
        before = uturn_sequence.to_path_data()
        assert create_mean_line(uturn_sequence, 1, 2) is None
        assert uturn_sequence.to_path_data() == before

    def test_wrong_kind_strict(self, uturn_sequence):
        with pytest.raises(PreconditionError):
            create_mean_line(uturn_sequence, 1, 2, strict=True)

    def test_missing_index(self, square_sequence):
        assert create_mean_line(square_sequence, 1, 30) is None


class TestMeanCubic:
    """Tests for mean cubics."""

    def test_opposite_arcs(self, opposite_arcs_sequence):
        arc = create_mean_cubic(opposite_arcs_sequence, 1, 3)

        assert arc.radius == pytest.approx(11.0, abs=0.05)
        assert opposite_arcs_sequence[1].last == pytest.approx([0, 11], abs=0.05)
        assert opposite_arcs_sequence[3].last == pytest.approx([11, 0], abs=0.05)

    def test_kinds_preserved(self, opposite_arcs_sequence):
        create_mean_cubic(opposite_arcs_sequence, 1, 3)
        assert opposite_arcs_sequence.kinds() == ["move", "cubic", "move", "cubic"]

    def test_straight_cubic_gives_none(self):
        sequence = parse_path_data("M 0 0 C 1 0 2 0 3 0 M 0 5 C 1 6 2 6 3 5")
        before = sequence.to_path_data()

        assert create_mean_cubic(sequence, 1, 3) is None
        assert sequence.to_path_data() == before

    def test_wrong_kind(self, square_sequence):
        assert create_mean_cubic(square_sequence, 1, 2) is None
        with pytest.raises(PreconditionError):
            create_mean_cubic(square_sequence, 1, 2, strict=True)


class TestZigzag:
    """Tests for the moveto + 4 lines heuristic."""

    def test_thin_in_second_and_fourth(self, square_sequence):
        line = create_line_from_mllll(square_sequence, EPS, 5.0)

        assert line.start == pytest.approx([3, 1.5])
        assert line.end == pytest.approx([0, 1.5])

    def test_thin_in_first_and_third(self):
        sequence = parse_path_data("M 0 0 L 1 0 L 1 10 L 2 10 L 2 0")
        line = create_line_from_mllll(sequence, EPS, 5.0)

        assert line.start == pytest.approx([0.5, 0])
        assert line.end == pytest.approx([1.5, 10])

    def test_wide_outline_gives_none(self):
        sequence = parse_path_data("M 0 0 L 10 0 L 10 10 L 0 10 L 0 0")
        assert create_line_from_mllll(sequence, EPS, 5.0) is None

    def test_first_branch_wins(self, square_sequence):
        # Both pairs are short and antiparallel
        line = create_line_from_mllll(square_sequence, EPS, 5.0)
        assert line.start == pytest.approx(square_sequence.get_line(2).midpoint())

    def test_too_few_primitives(self):
        sequence = parse_path_data("M 0 0 L 1 0 L 1 1")
        assert create_line_from_mllll(sequence, EPS, 5.0) is None

    def test_sequence_not_modified(self, square_sequence):
        before = square_sequence.to_path_data()
        create_line_from_mllll(square_sequence, EPS, 5.0)
        assert square_sequence.to_path_data() == before
