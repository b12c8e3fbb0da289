from enum import Enum

import numpy as np


class ProjectionAxis(Enum):
    """Axis dropped when flattening the level to 2D."""
    X = "x"
    Y = "y"
    Z = "z"

    @property
    def column(self) -> int:
        """Index of this axis in a vertex row."""
        return "xyz".index(self.value)

    @classmethod
    def parse(cls, text: str) -> "ProjectionAxis":
        try:
            return cls(text.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown projection axis '{text}' (expected x, y or z)") from None


def project_vertices(vertices: np.ndarray, axis: ProjectionAxis) -> np.ndarray:
    """
    Projects 3D vertices onto a 2D plane for the given axis.

    X (front view) keeps (y, z), Y (side view) keeps (x, z) and Z (top-down)
    keeps (x, -y); y is flipped so north points up.

    Args:
        vertices: (N, 3) array of x, y, z coordinates.
        axis: The axis to project along.

    Returns:
        A new (N, 2) array of (u, v) points, index-aligned with `vertices`.
    """
    vertices = np.asarray(vertices, dtype=float).reshape(-1, 3)
    x, y, z = vertices[:, 0], vertices[:, 1], vertices[:, 2]
    if axis is ProjectionAxis.X:
        return np.column_stack((y, z))
    if axis is ProjectionAxis.Y:
        return np.column_stack((x, z))
    return np.column_stack((x, -y))
