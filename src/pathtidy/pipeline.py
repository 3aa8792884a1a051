"""
Simplification pipeline for pathtidy.

Runs the U-turn and zig-zag collapses over each path, then removes
geometric duplicates across the batch.
"""

from pathtidy.config import PipelineConfig
from pathtidy.models import (
    BatchResult, CubicPrimitive, LinePrimitive, MovePrimitive,
    PrimitiveKind, SimplifyReport,
)
from pathtidy.path.pathdata import parse_path_data
from pathtidy.shapes.dedup import eliminate_duplicates
from pathtidy.shapes.path_shape import PathShape
from pathtidy.simplify.merge import create_line_from_mllll, replace_uturn_by_butt
from pathtidy.simplify.uturns import get_uturn_list
from pathtidy.tracer import get_tracer, trace


ZIGZAG_KINDS = [PrimitiveKind.MOVE.value] + [PrimitiveKind.LINE.value] * 4


def is_zigzag_outline(sequence):
    """Move followed by exactly four lines, optionally closed."""
    kinds = sequence.kinds()
    if kinds and kinds[-1] == PrimitiveKind.CLOSE.value:
        kinds = kinds[:-1]
    return kinds == ZIGZAG_KINDS


def collapse_uturns(sequence, angle_eps, strict=False):
    """
    Replace every U-turn by a butt line.

    Works from the highest index down so earlier indexes stay valid. A pair
    consumed by the replacement above it is skipped.

    Returns:
        (indexes found, number replaced)
    """
    uturns = get_uturn_list(sequence, angle_eps)
    replaced = 0
    for index in reversed(uturns):
        if not isinstance(sequence.get(index), CubicPrimitive):
            continue
        if not isinstance(sequence.get(index + 1), CubicPrimitive):
            continue
        if replace_uturn_by_butt(sequence, index, strict=strict) is not None:
            replaced += 1
    return uturns, replaced


def collapse_zigzag(sequence, angle_eps, max_width):
    """
    Turn a thin four-line outline into its centre line, in place.

    Returns True when the sequence was replaced.
    """
    if not is_zigzag_outline(sequence):
        return False
    line = create_line_from_mllll(sequence, angle_eps, max_width)
    if line is None:
        return False

    sequence.closed = False
    sequence.replace_all([MovePrimitive(last=line.start), LinePrimitive(last=line.end)])
    return True


@trace(label="simplify_sequence")
def simplify_sequence(sequence, config=None):
    """
    Simplify one sequence in place.

    Args:
        sequence: PrimitiveSequence
        config: PipelineConfig (defaults if None)

    Returns:
        SimplifyReport
    """
    if config is None:
        config = PipelineConfig()
    tracer = get_tracer()

    angle_eps = config.simplify.angle_eps
    before = len(sequence)

    uturns = []
    replaced = 0
    if config.simplify.collapse_uturns:
        uturns, replaced = collapse_uturns(sequence, angle_eps, strict=config.strict)

    zigzag = False
    if config.simplify.collapse_zigzags:
        zigzag = collapse_zigzag(sequence, angle_eps, config.simplify.max_width)

    report = SimplifyReport(
        primitives_before=before,
        primitives_after=len(sequence),
        uturns_found=uturns,
        uturns_replaced=replaced,
        zigzag_collapsed=zigzag,
    )
    tracer.event(f"Simplified: {before} -> {len(sequence)} primitives", uturns=replaced, zigzag=zigzag)
    return report


@trace(label="simplify_paths")
def simplify_paths(path_data_list, config=None):
    """
    Simplify a batch of path data strings and drop duplicates.

    Raises ValueError if any path data cannot be parsed.

    Returns:
        BatchResult with the surviving paths in input order
    """
    if config is None:
        config = PipelineConfig()
    tracer = get_tracer()

    shapes = []
    reports = []
    for index, d in enumerate(path_data_list):
        with tracer.span(f"path_{index}", module="pipeline"):
            sequence = parse_path_data(d)
            reports.append(simplify_sequence(sequence, config))
            shapes.append(PathShape(sequence, path_id=index))

    removed = []
    if config.dedup.enabled:
        removed = eliminate_duplicates(shapes, config.dedup.epsilon)

    precision = config.output.precision
    return BatchResult(
        paths=[shape.sequence.to_path_data(precision=precision) for shape in shapes],
        reports=reports,
        duplicates_removed=len(removed),
    )
