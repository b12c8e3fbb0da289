import unittest
import numpy as np

import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from levelmap.level import Face, Level, Texture
from levelmap.textures import filter_faces, is_ignored_texture


class TestIsIgnoredTexture(unittest.TestCase):

    def test_exact_names(self):
        for name in ("clip", "hint", "trigger", "163"):
            self.assertTrue(is_ignored_texture(name), name)

    def test_substring_needles(self):
        for name in ("sky1", "light1_2", "tech04_1", "wood1_1", "my_sky_box"):
            self.assertTrue(is_ignored_texture(name), name)

    def test_regular_textures_kept(self):
        for name in ("wall", "metal", "floor01", "clips", "1630"):
            self.assertFalse(is_ignored_texture(name), name)

    def test_case_sensitive(self):
        """Only the literal lowercase names are ignored."""
        self.assertFalse(is_ignored_texture("CLIP"))
        self.assertFalse(is_ignored_texture("SKY1"))


class TestFilterFaces(unittest.TestCase):

    def test_keeps_order_and_drops_ignored(self):
        textures = [Texture("wall"), Texture("sky1"), Texture("clip"), Texture("metal")]
        vertices = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [0.0, 1.0, 0.0]])
        faces = [
            Face(edge_list_index=10, vertex_indices=(0, 1, 2), texture_index=3),
            Face(edge_list_index=11, vertex_indices=(0, 1, 2), texture_index=1),
            Face(edge_list_index=12, vertex_indices=(0, 1, 2), texture_index=0),
            Face(edge_list_index=13, vertex_indices=(0, 1, 2), texture_index=2),
        ]
        level = Level(vertices=vertices, faces=faces, textures=textures)

        kept = filter_faces(level)
        self.assertEqual([face.edge_list_index for face in kept], [10, 12])

    def test_all_ignored(self):
        level = Level(
            vertices=np.array([[0.0, 0.0, 0.0]]),
            faces=[Face(edge_list_index=0, vertex_indices=(0,), texture_index=0)],
            textures=[Texture("trigger")],
        )
        self.assertEqual(filter_faces(level), [])


if __name__ == '__main__':
    unittest.main()
