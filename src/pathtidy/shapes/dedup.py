"""
Geometric duplicate detection over shape collections.

All lookups share one scan, iter_equivalent_indexes; the other functions
only decide what to collect from it.
"""

from pathtidy.shapes.base import Shape
from pathtidy.tracer import get_tracer, trace


def iter_equivalent_indexes(shapes, shape, epsilon):
    """
    Yield, in ascending order, indexes of shapes equivalent to shape.

    None entries (and a None query) never match.
    """
    if shapes is None or shape is None:
        return
    for i, candidate in enumerate(shapes):
        if candidate is not None and candidate.is_geometrically_equal_to(shape, epsilon):
            yield i


def indexes_of_equivalent(shapes, shape, epsilon):
    """Every index equivalent to shape; empty list if none."""
    return list(iter_equivalent_indexes(shapes, shape, epsilon))


def first_index_of_equivalent(shapes, shape, epsilon):
    """First index equivalent to shape, or None."""
    return next(iter_equivalent_indexes(shapes, shape, epsilon), None)


def contains_equivalent(shapes, shape, epsilon):
    return first_index_of_equivalent(shapes, shape, epsilon) is not None


@trace(label="eliminate_duplicates")
def eliminate_duplicates(shapes, epsilon):
    """
    Remove geometric duplicates from shapes in place.

    The earliest shape of each equivalence class is kept. Duplicates are
    found in one forward pass and deleted from the highest index down, so
    each deletion leaves the remaining indexes valid.

    Returns:
        list of removed shapes, in their input order
    """
    kept = []
    duplicate_indexes = []
    for i, shape in enumerate(shapes):
        if contains_equivalent(kept, shape, epsilon):
            duplicate_indexes.append(i)
        else:
            kept.append(shape)

    removed = []
    for i in reversed(duplicate_indexes):
        removed.append(shapes.pop(i))
    removed.reverse()

    get_tracer().event(f"Removed {len(removed)} duplicates, {len(shapes)} shapes remain")
    return removed


def extract_shapes(elements):
    """New list with the elements that are shapes, order preserved."""
    return [element for element in elements if isinstance(element, Shape)]
