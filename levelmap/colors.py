from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .constants import RASTER_CHANNELS
from .errors import TextureFetchError
from .level import Texture
from .raster import Raster, RasterProvider, TextureScale

RGB = Tuple[int, int, int]
ColorTable = Dict[str, RGB]


def average_color(raster: Raster) -> RGB:
    """
    Mean color of a raster, each channel truncated to an integer.

    Args:
        raster: Raster whose data is a flat sequence of interleaved RGB samples,
                either a uint8 array or a raw byte buffer.

    Returns:
        (r, g, b) with each channel in 0-255.
    """
    if isinstance(raster.data, (bytes, bytearray, memoryview)):
        data = np.frombuffer(raster.data, dtype=np.uint8)
    else:
        data = np.asarray(raster.data, dtype=np.uint8).reshape(-1)
    texel_count = len(data) // RASTER_CHANNELS
    if texel_count == 0:
        raise TextureFetchError("Cannot average an empty raster")
    texels = data[:texel_count * RASTER_CHANNELS].reshape(-1, RASTER_CHANNELS)
    mean = texels.astype(np.float64).mean(axis=0)
    return tuple(int(channel) for channel in mean)


def _unique_textures(textures: Sequence[Texture]) -> List[Texture]:
    seen = set()
    unique = []
    for texture in textures:
        if texture.name not in seen:
            seen.add(texture.name)
            unique.append(texture)
    return unique


def sample_texture_colors(textures: Sequence[Texture], provider: RasterProvider,
                          scale: TextureScale = TextureScale.EIGHTH,
                          workers: int = 1) -> ColorTable:
    """
    Builds the table of mean colors, one entry per distinct texture name.

    Rasters are requested at a reduced `scale`; full resolution is rarely
    worth it for a single average. With `workers` > 1 textures are sampled in
    a thread pool and merged here, in texture order.

    Raises:
        TextureFetchError: If any raster cannot be fetched.
    """
    unique = _unique_textures(textures)

    def sample(texture: Texture) -> RGB:
        return average_color(provider.read_texture_image(texture, scale))

    if workers > 1 and len(unique) > 1:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            colors = list(executor.map(sample, unique))
    else:
        colors = [sample(texture) for texture in unique]

    return {texture.name: color for texture, color in zip(unique, colors)}


def to_hex(color: RGB) -> str:
    """Formats an RGB triple as lowercase '#rrggbb'."""
    return "#{:02x}{:02x}{:02x}".format(*color)
