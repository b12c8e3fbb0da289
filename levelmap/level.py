from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from .errors import SourceParseError


@dataclass(frozen=True)
class Texture:
    """A named surface texture. Its raster is fetched on demand from a provider."""
    name: str


@dataclass(frozen=True)
class Face:
    """A planar polygon of the level."""
    edge_list_index: int  # Depth-ordering key from the source format
    vertex_indices: Tuple[int, ...]
    texture_index: int


@dataclass
class Level:
    """
    A parsed level: vertices, planar faces and the textures they reference.

    Attributes:
        vertices: (N, 3) float array of x, y, z coordinates.
        faces: Faces in source order.
        textures: Textures referenced by Face.texture_index.
    """
    vertices: np.ndarray
    faces: List[Face] = field(default_factory=list)
    textures: List[Texture] = field(default_factory=list)

    def __post_init__(self):
        """Normalize vertices and check that every face references valid data."""
        vertices = np.asarray(self.vertices, dtype=float)
        if vertices.size == 0:
            vertices = vertices.reshape(0, 3)
        if vertices.ndim != 2 or vertices.shape[1] != 3:
            raise SourceParseError(f"Vertices must have shape (N, 3), got {vertices.shape}")
        self.vertices = vertices

        vertex_count = len(self.vertices)
        texture_count = len(self.textures)
        for face in self.faces:
            if not 0 <= face.texture_index < texture_count:
                raise SourceParseError(
                    f"Face {face.edge_list_index} references missing texture {face.texture_index}"
                )
            for index in face.vertex_indices:
                if not 0 <= index < vertex_count:
                    raise SourceParseError(
                        f"Face {face.edge_list_index} references missing vertex {index}"
                    )

    def face_texture(self, face: Face) -> Texture:
        return self.textures[face.texture_index]

    def face_vertex_indices(self, face: Face) -> Sequence[int]:
        return face.vertex_indices

    def face_vertices(self, face: Face) -> np.ndarray:
        """Returns the face's vertices as a (K, 3) array, in face order."""
        return self.vertices[list(face.vertex_indices)].reshape(-1, 3)
