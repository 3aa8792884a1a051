"""
SVG emission for simplified paths.
"""

import os

import svgwrite

from pathtidy.path.pathdata import parse_path_data
from pathtidy.tracer import get_tracer, trace


def compute_view_box(path_data_list, margin=0.0):
    """
    (min_x, min_y, width, height) covering every path, padded by margin.

    An empty batch gives a unit box at the origin.
    """
    bboxes = []
    for d in path_data_list:
        bbox = parse_path_data(d).bounding_box()
        if bbox is not None:
            bboxes.append(bbox)

    if not bboxes:
        return (0.0, 0.0, 1.0, 1.0)

    min_x = min(b[0] for b in bboxes) - margin
    min_y = min(b[1] for b in bboxes) - margin
    max_x = max(b[2] for b in bboxes) + margin
    max_y = max(b[3] for b in bboxes) + margin
    return (min_x, min_y, max(max_x - min_x, 1.0), max(max_y - min_y, 1.0))


@trace(label="emit_paths_svg")
def emit_paths_svg(path_data_list, stroke_width=1.0, stroke_color="black", margin=2.0):
    """
    Create an SVG document containing one path element per path.

    Returns:
        svgwrite.Drawing object
    """
    tracer = get_tracer()

    min_x, min_y, width, height = compute_view_box(path_data_list, margin)

    dwg = svgwrite.Drawing(size=(f"{width:g}px", f"{height:g}px"))
    dwg.viewbox(min_x, min_y, width, height)

    group = dwg.g(id="paths", fill="none", stroke=stroke_color, stroke_width=stroke_width)
    for index, d in enumerate(path_data_list):
        if d:
            group.add(dwg.path(d=d, id=f"path_{index}"))
    dwg.add(group)

    tracer.event(f"SVG emitted with {len(path_data_list)} paths")
    return dwg


def save_svg(svg_content, path):
    """Write an svgwrite drawing (or SVG text) to path."""
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    get_tracer().event(f"Saved SVG: {path}")
