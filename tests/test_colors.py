import unittest
import numpy as np

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from levelmap.colors import average_color, sample_texture_colors, to_hex
from levelmap.errors import TextureFetchError
from levelmap.level import Texture
from levelmap.raster import ArrayRasterProvider, Raster, TextureScale


def solid(color, width=16, height=16):
    return np.full((height, width, 3), color, dtype=np.uint8)


class RecordingProvider(ArrayRasterProvider):
    """Array provider that remembers every request."""

    def __init__(self, images):
        super().__init__(images)
        self.requests = []

    def read_texture_image(self, texture, scale):
        self.requests.append((texture.name, scale))
        return super().read_texture_image(texture, scale)


class BytesProvider:
    """Provider returning raw byte buffers, as an image decoder would."""

    def __init__(self, buffers):
        self.buffers = buffers

    def read_texture_image(self, texture, scale):
        width, height, data = self.buffers[texture.name]
        return Raster(width=width, height=height, data=data)


class TestAverageColor(unittest.TestCase):

    def test_uniform_raster(self):
        raster = Raster(width=2, height=1, data=np.array([10, 20, 30, 10, 20, 30], dtype=np.uint8))
        self.assertEqual(average_color(raster), (10, 20, 30))

    def test_mean_is_truncated(self):
        raster = Raster(width=2, height=1, data=np.array([0, 0, 0, 1, 1, 3], dtype=np.uint8))
        self.assertEqual(average_color(raster), (0, 0, 1))

    def test_channels_averaged_independently(self):
        data = np.array([255, 0, 0, 0, 255, 0, 0, 0, 255, 0, 0, 0], dtype=np.uint8)
        self.assertEqual(average_color(Raster(width=4, height=1, data=data)), (63, 63, 63))

    def test_byte_buffer(self):
        raster = Raster(width=2, height=1, data=bytes([10, 20, 30, 10, 20, 30]))
        self.assertEqual(average_color(raster), (10, 20, 30))

    def test_bytearray_buffer_is_truncated(self):
        raster = Raster(width=2, height=1, data=bytearray([0, 0, 0, 1, 1, 3]))
        self.assertEqual(average_color(raster), (0, 0, 1))

    def test_empty_byte_buffer_raises(self):
        with self.assertRaises(TextureFetchError):
            average_color(Raster(width=0, height=0, data=b""))

    def test_empty_raster_raises(self):
        with self.assertRaises(TextureFetchError):
            average_color(Raster(width=0, height=0, data=np.zeros(0, dtype=np.uint8)))


class TestSampleTextureColors(unittest.TestCase):

    def test_uniform_texture(self):
        provider = ArrayRasterProvider({"metal": solid((10, 20, 30))})
        table = sample_texture_colors([Texture("metal")], provider)
        self.assertEqual(table, {"metal": (10, 20, 30)})

    def test_provider_returning_bytes(self):
        provider = BytesProvider({"metal": (2, 1, bytes([10, 20, 30, 10, 20, 30]))})
        table = sample_texture_colors([Texture("metal")], provider)
        self.assertEqual(table, {"metal": (10, 20, 30)})

    def test_requests_eighth_scale_by_default(self):
        provider = RecordingProvider({"metal": solid((1, 2, 3)), "wall": solid((4, 5, 6))})
        sample_texture_colors([Texture("metal"), Texture("wall")], provider)
        self.assertEqual(provider.requests, [("metal", TextureScale.EIGHTH), ("wall", TextureScale.EIGHTH)])

    def test_duplicate_names_sampled_once(self):
        provider = RecordingProvider({"metal": solid((1, 2, 3))})
        table = sample_texture_colors([Texture("metal"), Texture("metal")], provider)
        self.assertEqual(len(table), 1)
        self.assertEqual(len(provider.requests), 1)

    def test_missing_raster_propagates(self):
        provider = ArrayRasterProvider({"metal": solid((1, 2, 3))})
        with self.assertRaises(TextureFetchError):
            sample_texture_colors([Texture("metal"), Texture("ghost")], provider)

    def test_parallel_matches_sequential(self):
        images = {f"tex{i}": solid((i, 2 * i, 3 * i)) for i in range(12)}
        textures = [Texture(name) for name in images]
        provider = ArrayRasterProvider(images)
        sequential = sample_texture_colors(textures, provider)
        parallel = sample_texture_colors(textures, provider, workers=4)
        self.assertEqual(parallel, sequential)
        self.assertEqual(list(parallel), list(sequential))


class TestArrayRasterProvider(unittest.TestCase):

    def test_full_scale_returns_every_texel(self):
        provider = ArrayRasterProvider({"metal": solid((1, 2, 3), width=4, height=2)})
        raster = provider.read_texture_image(Texture("metal"), TextureScale.FULL)
        self.assertEqual((raster.width, raster.height), (4, 2))
        self.assertEqual(len(raster.data), 4 * 2 * 3)

    def test_eighth_scale_downsamples(self):
        provider = ArrayRasterProvider({"metal": solid((1, 2, 3), width=16, height=16)})
        raster = provider.read_texture_image(Texture("metal"), TextureScale.EIGHTH)
        self.assertEqual((raster.width, raster.height), (2, 2))
        self.assertEqual(len(raster.data), 12)

    def test_small_texture_keeps_one_texel(self):
        provider = ArrayRasterProvider({"tiny": solid((9, 9, 9), width=3, height=5)})
        raster = provider.read_texture_image(Texture("tiny"), TextureScale.EIGHTH)
        self.assertEqual((raster.width, raster.height), (1, 1))
        self.assertEqual(list(raster.data), [9, 9, 9])

    def test_row_major_layout(self):
        image = np.array([[[1, 1, 1], [2, 2, 2]], [[3, 3, 3], [4, 4, 4]]], dtype=np.uint8)
        provider = ArrayRasterProvider({"grid": image})
        raster = provider.read_texture_image(Texture("grid"), TextureScale.FULL)
        self.assertEqual(list(raster.data), [1, 1, 1, 2, 2, 2, 3, 3, 3, 4, 4, 4])

    def test_unknown_texture(self):
        with self.assertRaises(TextureFetchError):
            ArrayRasterProvider().read_texture_image(Texture("ghost"), TextureScale.FULL)

    def test_rejects_bad_image_shape(self):
        with self.assertRaises(TextureFetchError):
            ArrayRasterProvider({"flat": np.zeros((4, 4), dtype=np.uint8)})

    def test_parse_scale(self):
        self.assertIs(TextureScale.parse("eighth"), TextureScale.EIGHTH)
        with self.assertRaises(ValueError):
            TextureScale.parse("tenth")


class TestToHex(unittest.TestCase):

    def test_lowercase_two_digits(self):
        self.assertEqual(to_hex((10, 20, 30)), "#0a141e")
        self.assertEqual(to_hex((255, 255, 255)), "#ffffff")
        self.assertEqual(to_hex((0, 171, 205)), "#00abcd")


if __name__ == '__main__':
    unittest.main()
