import json
import os
from pathlib import Path
from typing import Any, Dict, List, Tuple, Union

import numpy as np
import svgwrite
import trimesh

from .constants import (
    FALLBACK_MESH_COLOR,
    FILE_EXT_JSON,
    FILE_EXT_SVG,
    MESH_TEXTURE_SIZE,
    MISSING_COLOR,
)
from .errors import SourceParseError, TextureFetchError
from .level import Face, Level, Texture
from .raster import ArrayRasterProvider, TextureScale

PathLike = Union[str, Path]


def save_svg(document: svgwrite.Drawing, output_dir: PathLike, label: str) -> Path:
    """
    Saves an SVG document as <output_dir>/<label>.svg.

    Args:
        document: The drawing to write.
        output_dir: Target directory, created if missing.
        label: Output name; the .svg suffix is appended unless already present.

    Returns:
        The path written.
    """
    file_name = label if label.lower().endswith(FILE_EXT_SVG) else label + FILE_EXT_SVG
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    file_path = output_dir / file_name

    print(f"Saving SVG to: {file_path}")
    try:
        with open(file_path, 'w', encoding='utf-8') as f:
            document.write(f, pretty=True)
        print("SVG save successful.")
    except Exception as e:
        print(f"Error during SVG save: {e}")
        raise
    return file_path


def _channel_array(values: Any, what: str) -> np.ndarray:
    """Converts JSON channel values to uint8, rejecting anything outside 0-255."""
    channels = np.asarray(values, dtype=np.int64)
    if channels.size and (channels.min() < 0 or channels.max() > 255):
        raise ValueError(f"{what} channels must be within 0-255")
    return channels.astype(np.uint8)


def _texture_image(entry: Dict[str, Any]) -> np.ndarray:
    """Builds the full-resolution image of a JSON texture entry."""
    if "pixels" in entry:
        return _channel_array(entry["pixels"], f"Pixels of texture '{entry.get('name')}'")
    color = _channel_array(entry.get("color", MISSING_COLOR), f"Color of texture '{entry.get('name')}'")
    width, height = entry.get("size", (TextureScale.EIGHTH.value, TextureScale.EIGHTH.value))
    return np.tile(color, (int(height), int(width), 1))


def level_from_dict(data: Dict[str, Any]) -> Tuple[Level, ArrayRasterProvider]:
    """
    Reconstructs a level and its texture rasters from a dictionary.

    Raises:
        SourceParseError: If the data does not describe a valid level.
    """
    try:
        textures = [Texture(name=str(entry["name"])) for entry in data.get("textures", [])]
        provider = ArrayRasterProvider()
        for texture, entry in zip(textures, data.get("textures", [])):
            provider.add_image(texture.name, _texture_image(entry))

        faces = [
            Face(
                edge_list_index=int(entry.get("edge_list_index", position)),
                vertex_indices=tuple(int(i) for i in entry["vertices"]),
                texture_index=int(entry["texture"]),
            )
            for position, entry in enumerate(data.get("faces", []))
        ]
        vertices = np.asarray(data.get("vertices", []), dtype=float)
    except (KeyError, TypeError, ValueError, OverflowError, AttributeError, TextureFetchError) as e:
        raise SourceParseError(f"Invalid level data: {e}") from e

    return Level(vertices=vertices, faces=faces, textures=textures), provider


def level_to_dict(level: Level, provider: ArrayRasterProvider) -> Dict[str, Any]:
    """Serializes a level and the full-resolution images of its textures."""
    return {
        "vertices": level.vertices.tolist(),
        "textures": [
            {"name": texture.name, "pixels": provider.images[texture.name].tolist()}
            for texture in level.textures
        ],
        "faces": [
            {
                "edge_list_index": face.edge_list_index,
                "vertices": list(face.vertex_indices),
                "texture": face.texture_index,
            }
            for face in level.faces
        ],
    }


def load_level_from_json(file_path: PathLike) -> Tuple[Level, ArrayRasterProvider]:
    """
    Loads a level from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SourceParseError: If the file is not valid JSON or not a valid level.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Level file not found: {file_path}")

    print(f"Loading level from: {file_path}")
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise SourceParseError(f"Level file {file_path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SourceParseError(f"Level file {file_path} must contain a JSON object")

    level, provider = level_from_dict(data)
    print(f"Level loaded. Vertices: {len(level.vertices)}, Faces: {len(level.faces)}, Textures: {len(level.textures)}")
    return level, provider


def save_level_to_json(level: Level, provider: ArrayRasterProvider, file_path: PathLike) -> Path:
    """Saves a level and its texture images to a JSON file. Returns the written path."""
    file_path = str(file_path)
    if not file_path.lower().endswith(FILE_EXT_JSON):
        file_path += FILE_EXT_JSON

    export_dir = os.path.dirname(file_path)
    if export_dir:
        os.makedirs(export_dir, exist_ok=True)

    print(f"Saving level to: {file_path}")
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(level_to_dict(level, provider), f, indent=4)
    return Path(file_path)


def _main_color(mesh: trimesh.Trimesh) -> np.ndarray:
    """Most common RGB color of a mesh, falling back to trimesh's default color."""
    visual = mesh.visual
    try:
        if isinstance(visual, trimesh.visual.TextureVisuals):
            visual = visual.to_color()
        return np.asarray(visual.main_color, dtype=np.uint8)[:3]
    except (AttributeError, ValueError, IndexError) as e:
        print(f"Warning: Could not read mesh color ({e}). Using default color.")
        return np.asarray(FALLBACK_MESH_COLOR, dtype=np.uint8)


def level_from_scene(scene: trimesh.Scene) -> Tuple[Level, ArrayRasterProvider]:
    """
    Converts a trimesh scene into a level.

    Each mesh geometry becomes one texture named after the geometry, with a
    solid raster of its main color; each triangle becomes one face. Node
    transforms are applied to the vertices.
    """
    vertex_blocks: List[np.ndarray] = []
    faces: List[Face] = []
    textures: List[Texture] = []
    provider = ArrayRasterProvider()
    texture_ids: Dict[str, int] = {}
    offset = 0

    for node_name in scene.graph.nodes_geometry:
        transform, geometry_name = scene.graph[node_name]
        geometry = scene.geometry[geometry_name]
        if not isinstance(geometry, trimesh.Trimesh) or len(geometry.faces) == 0:
            continue
        mesh = geometry.copy()
        mesh.apply_transform(transform)

        if geometry_name not in texture_ids:
            texture_ids[geometry_name] = len(textures)
            textures.append(Texture(name=geometry_name))
            width, height = MESH_TEXTURE_SIZE
            provider.add_image(geometry_name, np.tile(_main_color(mesh), (height, width, 1)))

        for triangle in mesh.faces:
            faces.append(Face(
                edge_list_index=len(faces),
                vertex_indices=tuple(int(i) + offset for i in triangle),
                texture_index=texture_ids[geometry_name],
            ))
        vertex_blocks.append(np.asarray(mesh.vertices, dtype=float))
        offset += len(mesh.vertices)

    vertices = np.vstack(vertex_blocks) if vertex_blocks else np.zeros((0, 3))
    return Level(vertices=vertices, faces=faces, textures=textures), provider


def load_level_from_mesh(file_path: PathLike) -> Tuple[Level, ArrayRasterProvider]:
    """
    Loads any mesh format trimesh understands (OBJ, GLB, PLY, STL, ...) as a level.

    Raises:
        FileNotFoundError: If the file does not exist.
        SourceParseError: If trimesh cannot load the file.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"Level file not found: {file_path}")

    print(f"Loading mesh level from: {file_path}")
    try:
        scene = trimesh.load(str(file_path), force='scene')
    except Exception as e:
        raise SourceParseError(f"Could not load mesh {file_path}: {e}") from e

    level, provider = level_from_scene(scene)
    print(f"Level loaded. Vertices: {len(level.vertices)}, Faces: {len(level.faces)}, Textures: {len(level.textures)}")
    return level, provider


def load_level(file_path: PathLike) -> Tuple[Level, ArrayRasterProvider]:
    """Loads a level, picking the loader from the file extension."""
    if str(file_path).lower().endswith(FILE_EXT_JSON):
        return load_level_from_json(file_path)
    return load_level_from_mesh(file_path)
