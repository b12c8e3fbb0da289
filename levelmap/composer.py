from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np
import svgwrite

from .colors import ColorTable, to_hex
from .constants import (
    BACKGROUND_FILL,
    BORDER_STROKE,
    BORDER_STROKE_MITERLIMIT,
    BORDER_STROKE_WIDTH,
    INTERIOR_FILL,
    INTERIOR_STROKE,
    INTERIOR_STROKE_WIDTH,
    MISSING_COLOR,
    REFERENCE_GROUP_ID,
    VIEWBOX_PADDING,
)
from .level import Face, Level
from .ordering import checked_extent

Point2 = Tuple[float, float]


@dataclass(frozen=True)
class DrawableFace:
    """One face ready to be drawn: projected outline plus its original depth range."""
    points: Tuple[Point2, ...]
    texture_name: str
    min_depth: float
    max_depth: float


def build_drawable_faces(level: Level, faces: Sequence[Face], projected: np.ndarray) -> List[DrawableFace]:
    """
    Maps ordered faces to their projected outlines.

    The depth range is taken from the original z coordinates of each face.
    Faces without points are skipped; output order follows `faces`.

    Args:
        level: The level the faces belong to.
        faces: Faces in drawing order (see filter_and_sort_faces).
        projected: (N, 2) projected points, index-aligned with level.vertices.
    """
    drawables = []
    for face in faces:
        indices = level.face_vertex_indices(face)
        if len(indices) == 0:
            continue
        points = tuple((float(projected[i][0]), float(projected[i][1])) for i in indices)
        min_depth, max_depth = checked_extent(level.face_vertices(face)[:, 2],
                                              f"face {face.edge_list_index}")
        drawables.append(DrawableFace(
            points=points,
            texture_name=level.face_texture(face).name,
            min_depth=min_depth,
            max_depth=max_depth,
        ))
    return drawables


def compute_viewbox(projected: np.ndarray, padding: float = VIEWBOX_PADDING) -> Tuple[float, float, float, float]:
    """
    Returns (min_x, min_y, width, height) covering every projected point plus padding.

    Raises:
        DepthComputationError: If there are no points or a coordinate is NaN.
    """
    projected = np.asarray(projected, dtype=float).reshape(-1, 2)
    min_u, max_u = checked_extent(projected[:, 0], "projected u")
    min_v, max_v = checked_extent(projected[:, 1], "projected v")
    return (
        min_u - padding,
        min_v - padding,
        max_u - min_u + 2.0 * padding,
        max_v - min_v + 2.0 * padding,
    )


def compose_document(drawable_faces: Sequence[DrawableFace], projected: np.ndarray,
                     color_table: ColorTable, padding: float = VIEWBOX_PADDING,
                     background: str = BACKGROUND_FILL) -> svgwrite.Drawing:
    """
    Assembles the SVG map.

    The polygons go into a hidden group inside <defs>, drawn in the given
    order. That group is then rendered twice through <use>: first with a thick
    black stroke for the cell borders, then with a light fill and thin stroke
    on top, which leaves a cell-shaded look with visible outlines.

    Args:
        drawable_faces: Faces in painting order.
        projected: All projected points of the level; they define the viewBox.
        color_table: Mean color per texture name. Missing textures are white.
        padding: Margin added around the projected extent.
        background: Fill of the rectangle behind the map.

    Returns:
        The svgwrite.Drawing (not yet saved).
    """
    min_x, min_y, width, height = compute_viewbox(projected, padding)
    document = svgwrite.Drawing(debug=False, viewBox=f"{min_x!r} {min_y!r} {width!r} {height!r}")

    reference = document.g(id=REFERENCE_GROUP_ID)
    for item in drawable_faces:
        fill = to_hex(color_table.get(item.texture_name, MISSING_COLOR))
        reference.add(document.polygon(points=list(item.points), fill=fill))

    # Drawing always carries its <defs> as the first child; the background goes in front of it
    document.elements.insert(0, document.rect(insert=(min_x, min_y), size=(width, height), fill=background))
    document.defs.add(reference)
    document.add(document.use(
        f"#{REFERENCE_GROUP_ID}",
        stroke=BORDER_STROKE,
        stroke_width=BORDER_STROKE_WIDTH,
        stroke_miterlimit=BORDER_STROKE_MITERLIMIT,
    ))
    document.add(document.use(
        f"#{REFERENCE_GROUP_ID}",
        fill=INTERIOR_FILL,
        stroke=INTERIOR_STROKE,
        stroke_width=INTERIOR_STROKE_WIDTH,
    ))
    return document
