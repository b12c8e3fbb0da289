from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional, Protocol, Union

import numpy as np

from .constants import RASTER_CHANNELS
from .errors import TextureFetchError
from .level import Texture


class TextureScale(Enum):
    """Linear downsample factor applied when fetching a texture raster."""
    FULL = 1
    HALF = 2
    QUARTER = 4
    EIGHTH = 8

    @classmethod
    def parse(cls, text: str) -> "TextureScale":
        try:
            return cls[text.strip().upper()]
        except KeyError:
            choices = ", ".join(scale.name.lower() for scale in cls)
            raise ValueError(f"Unknown texture scale '{text}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class Raster:
    """A decoded texture: `data` is a row-major RGB uint8 buffer of width * height * 3 bytes."""
    width: int
    height: int
    data: Union[np.ndarray, bytes]


class RasterProvider(Protocol):
    def read_texture_image(self, texture: Texture, scale: TextureScale) -> Raster:
        ...


class ArrayRasterProvider:
    """
    Serves texture rasters from full-resolution (H, W, 3) arrays keyed by texture name.

    Reduced scales keep every n-th texel along both axes, so a texture always
    yields at least one texel.
    """

    def __init__(self, images: Optional[Mapping[str, np.ndarray]] = None):
        self.images: Dict[str, np.ndarray] = {}
        for name, image in (images or {}).items():
            self.add_image(name, image)

    def add_image(self, name: str, image: np.ndarray):
        array = np.asarray(image, dtype=np.uint8)
        if array.ndim != 3 or array.shape[2] != RASTER_CHANNELS or array.shape[0] == 0 or array.shape[1] == 0:
            raise TextureFetchError(f"Texture '{name}' must be a non-empty (H, W, 3) image, got {array.shape}")
        self.images[name] = array

    def read_texture_image(self, texture: Texture, scale: TextureScale) -> Raster:
        image = self.images.get(texture.name)
        if image is None:
            raise TextureFetchError(f"No raster available for texture '{texture.name}'")
        step = scale.value
        reduced = image[::step, ::step]
        return Raster(width=reduced.shape[1], height=reduced.shape[0], data=reduced.reshape(-1).copy())
