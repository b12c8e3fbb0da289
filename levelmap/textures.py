from typing import List

from .constants import IGNORED_TEXTURE_NAMES, IGNORED_TEXTURE_NEEDLES
from .level import Face, Level


def is_ignored_texture(name: str) -> bool:
    """
    Checks whether faces with this texture should be left out of the map.

    Exact names (clip brushes, hints, triggers) are checked first, then any
    name containing one of the needles (sky, lights, ...). Matching is
    case-sensitive on the literal name.
    """
    if name in IGNORED_TEXTURE_NAMES:
        return True
    return any(needle in name for needle in IGNORED_TEXTURE_NEEDLES)


def filter_faces(level: Level) -> List[Face]:
    """Returns the level's faces whose texture is not ignored, in original order."""
    return [face for face in level.faces
            if not is_ignored_texture(level.face_texture(face).name)]
