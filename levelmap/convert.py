"""
Level to SVG conversion pipeline.

Projects the level's vertices, samples one color per texture, orders the
visible faces back-to-front and composes the SVG map from the result.

Usage:
    from levelmap.convert import convert_to_file
    path = convert_to_file(level, provider, output_dir="target", label="e1m2")
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

import svgwrite

from .colors import ColorTable, sample_texture_colors
from .composer import DrawableFace, build_drawable_faces, compose_document
from .constants import VIEWBOX_PADDING
from .io import save_svg
from .level import Level
from .ordering import filter_and_sort_faces
from .projection import ProjectionAxis, project_vertices
from .raster import RasterProvider, TextureScale

Reporter = Callable[[str], None]


@dataclass
class ConversionResult:
    document: svgwrite.Drawing
    drawable_faces: List[DrawableFace]
    color_table: ColorTable


def depth_summary(drawable_faces: List[DrawableFace]) -> List[str]:
    """Distinct '<min>-<max>: <texture>' entries, sorted for stable output."""
    return sorted({f"{item.min_depth}-{item.max_depth}: {item.texture_name}" for item in drawable_faces})


def convert(level: Level, provider: RasterProvider, axis: ProjectionAxis = ProjectionAxis.Z,
            scale: TextureScale = TextureScale.EIGHTH, padding: float = VIEWBOX_PADDING,
            workers: int = 1, reporter: Optional[Reporter] = None) -> ConversionResult:
    """
    Converts a level into an SVG map.

    Args:
        level: Parsed level.
        provider: Source of texture rasters for color sampling.
        axis: Axis to project along (Z gives a top-down map).
        scale: Downsample scale used when sampling texture colors.
        padding: Margin around the projected extent.
        workers: Thread count for color sampling (1 samples sequentially).
        reporter: Optional callable receiving one line per distinct depth range
            and texture, after the document is composed.

    Raises:
        TextureFetchError: If a texture raster cannot be fetched.
        DepthComputationError: If a face has no vertices or a NaN coordinate.
    """
    projected = project_vertices(level.vertices, axis)
    color_table = sample_texture_colors(level.textures, provider, scale=scale, workers=workers)

    faces = filter_and_sort_faces(level, axis)
    drawable_faces = build_drawable_faces(level, faces, projected)
    document = compose_document(drawable_faces, projected, color_table, padding=padding)

    if reporter is not None:
        for line in depth_summary(drawable_faces):
            reporter(line)

    return ConversionResult(document=document, drawable_faces=drawable_faces, color_table=color_table)


def convert_to_file(level: Level, provider: RasterProvider, output_dir: Union[str, Path], label: str,
                    **options) -> Path:
    """Runs convert() and saves the document as <output_dir>/<label>.svg. Returns the written path."""
    result = convert(level, provider, **options)
    return save_svg(result.document, output_dir, label)
