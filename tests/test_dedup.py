"""Tests for geometric deduplication."""

import pytest

from pathtidy.geometry.lines import Segment
from pathtidy.path.pathdata import parse_path_data
from pathtidy.shapes.dedup import (
    contains_equivalent, eliminate_duplicates, extract_shapes, first_index_of_equivalent,
    indexes_of_equivalent,
)
from pathtidy.shapes.path_shape import PathShape


@pytest.fixture
def segments():
    return [
        Segment([0, 0], [1, 0]),
        Segment([5, 5], [6, 6]),
        Segment([1, 0], [0, 0]),
        Segment([0, 0.001], [1, 0]),
        Segment([5, 5], [6, 6]),
    ]


def path_shape(d, path_id=None):
    return PathShape(parse_path_data(d), path_id=path_id)


class TestLookups:
    """Tests for equivalence lookups."""

    def test_indexes_of_equivalent(self, segments):
        assert indexes_of_equivalent(segments, Segment([0, 0], [1, 0]), 0.01) == [0, 2, 3]

    def test_tighter_epsilon_finds_fewer(self, segments):
        assert indexes_of_equivalent(segments, Segment([0, 0], [1, 0]), 0.0001) == [0, 2]

    def test_no_match(self, segments):
        query = Segment([40, 40], [41, 41])
        assert indexes_of_equivalent(segments, query, 0.01) == []
        assert first_index_of_equivalent(segments, query, 0.01) is None
        assert not contains_equivalent(segments, query, 0.01)

    def test_first_index(self, segments):
        assert first_index_of_equivalent(segments, Segment([6, 6], [5, 5]), 0.01) == 1

    def test_none_entries_are_skipped(self):
        shapes = [None, Segment([0, 0], [1, 1]), None]
        assert indexes_of_equivalent(shapes, Segment([0, 0], [1, 1]), 0.01) == [1]
        assert indexes_of_equivalent(None, Segment([0, 0], [1, 1]), 0.01) == []
        assert indexes_of_equivalent(shapes, None, 0.01) == []

    def test_incompatible_kinds_never_match(self):
        shapes = [path_shape("M 0 0 L 1 0")]
        assert not contains_equivalent(shapes, Segment([0, 0], [1, 0]), 0.01)


class TestEliminateDuplicates:
    """Tests for in-place duplicate removal."""

    def test_keeps_earliest_of_each_class(self, segments):
        first, second = segments[0], segments[1]
        removed = eliminate_duplicates(segments, 0.01)

        assert len(segments) == 2
        assert segments[0] is first
        assert segments[1] is second
        assert len(removed) == 3

    def test_removed_in_input_order(self, segments):
        expected = [segments[2], segments[3], segments[4]]
        removed = eliminate_duplicates(segments, 0.01)
        assert all(a is b for a, b in zip(removed, expected))

    def test_idempotent(self, segments):
        eliminate_duplicates(segments, 0.01)
        assert eliminate_duplicates(segments, 0.01) == []
        assert len(segments) == 2

    def test_no_pair_left_equivalent(self, segments):
        eliminate_duplicates(segments, 0.01)
        for i, shape in enumerate(segments):
            for other in segments[i + 1:]:
                assert not shape.is_geometrically_equal_to(other, 0.01)

    def test_empty_list(self):
        shapes = []
        assert eliminate_duplicates(shapes, 0.01) == []

    def test_paths(self):
        shapes = [
            path_shape("M 0 0 L 10 0", "a"),
            path_shape("M 0 0 L 10 0", "b"),
            path_shape("M 0 0.001 L 10 0", "c"),
            path_shape("M 5 5 L 6 6", "d"),
        ]
        removed = eliminate_duplicates(shapes, 0.01)

        assert [s.path_id for s in shapes] == ["a", "d"]
        assert [s.path_id for s in removed] == ["b", "c"]


class TestPathShape:
    """Tests for the path shape wrapper."""

    def test_hash_is_position_only(self):
        assert path_shape("m 1 1 l 2 0").geometric_hash() == "M 1 1 L 3 1"

    def test_different_kinds_not_equal(self):
        line = path_shape("M 0 0 L 3 0")
        curve = path_shape("M 0 0 C 1 0 2 0 3 0")
        assert not line.is_geometrically_equal_to(curve, 0.01)

    def test_different_lengths_not_equal(self):
        assert not path_shape("M 0 0 L 3 0").is_geometrically_equal_to(path_shape("M 0 0 L 3 0 L 3 3"), 0.01)

    def test_bounding_box(self):
        assert path_shape("M 0 0 L 3 0 L 3 4").bounding_box() == [0, 0, 3, 4]


class TestExtractShapes:
    """Tests for filtering shapes from mixed collections."""

    def test_keeps_order(self):
        a = Segment([0, 0], [1, 0])
        b = path_shape("M 0 0 L 1 1")
        assert extract_shapes(["text", a, 3, None, b]) == [a, b]

    def test_empty(self):
        assert extract_shapes([]) == []
