import math
from typing import Iterable, List, Tuple

from .errors import DepthComputationError
from .level import Face, Level
from .projection import ProjectionAxis
from .textures import filter_faces


def checked_extent(values: Iterable[float], what: str) -> Tuple[float, float]:
    """
    Returns (min, max) of `values`.

    Raises:
        DepthComputationError: If there are no values or any value is NaN.
    """
    values = [float(v) for v in values]
    if not values:
        raise DepthComputationError(f"Cannot compute extent of {what}: no coordinates")
    if any(math.isnan(v) for v in values):
        raise DepthComputationError(f"Cannot compute extent of {what}: coordinate is NaN")
    return min(values), max(values)


def face_axis_minimum(level: Level, face: Face, axis: ProjectionAxis) -> float:
    """Smallest original (un-projected) coordinate of the face along `axis`."""
    vertices = level.face_vertices(face)
    lowest, _ = checked_extent(vertices[:, axis.column], f"face {face.edge_list_index}")
    return lowest


def filter_and_sort_faces(level: Level, axis: ProjectionAxis) -> List[Face]:
    """
    Filters out ignored faces and orders the rest back-to-front for painting.

    Faces are sorted ascending by their minimum coordinate along the axis, so
    lower geometry is drawn first and covered by whatever sits above it. The
    sort is stable: faces sharing a minimum keep their source order.

    Minima are kept in a list aligned with the filtered faces rather than keyed
    by `edge_list_index`, which the source format does not guarantee unique.

    Raises:
        DepthComputationError: If a face has no vertices or a NaN coordinate.
    """
    faces = filter_faces(level)
    minimums = [face_axis_minimum(level, face, axis) for face in faces]
    order = sorted(range(len(faces)), key=minimums.__getitem__)
    return [faces[i] for i in order]
