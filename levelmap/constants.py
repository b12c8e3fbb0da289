"""
LevelMap Constants Module

Centralized constants for the LevelMap converter.
Extracts magic numbers and repeated values from across the codebase.

Usage:
    from levelmap.constants import VIEWBOX_PADDING, IGNORED_TEXTURE_NAMES
"""

# =============================================================================
# Texture Filtering
# =============================================================================

# Faces using these textures are dropped (exact, case-sensitive match)
IGNORED_TEXTURE_NAMES = ("clip", "hint", "trigger", "163")

# Faces whose texture name contains any of these are dropped
IGNORED_TEXTURE_NEEDLES = ("sky", "light", "tech", "wood")

# =============================================================================
# Color Sampling
# =============================================================================

# Fill used when a texture has no sampled color
MISSING_COLOR = (255, 255, 255)

# Number of interleaved channels in a raster buffer
RASTER_CHANNELS = 3

# Default downsample scale name (see levelmap.raster.TextureScale)
DEFAULT_TEXTURE_SCALE = "EIGHTH"

# =============================================================================
# SVG Document
# =============================================================================

# Padding added on every side of the projected extent (map units)
VIEWBOX_PADDING = 100.0

# Background fill covering the whole viewBox
BACKGROUND_FILL = "black"

# Identifier of the hidden polygon group referenced by the overlays
REFERENCE_GROUP_ID = "bsp_ref"

# Overlay A: thick dark borders with sharp joins
BORDER_STROKE = "black"
BORDER_STROKE_WIDTH = 10
BORDER_STROKE_MITERLIMIT = 0

# Overlay B: light interior with thin outline
INTERIOR_FILL = "#eee"
INTERIOR_STROKE = "black"
INTERIOR_STROKE_WIDTH = "0.5"

# =============================================================================
# File I/O
# =============================================================================

# File extensions
FILE_EXT_SVG = ".svg"
FILE_EXT_JSON = ".json"

# Default output location
DEFAULT_OUTPUT_DIR = "target"

# =============================================================================
# Mesh Levels
# =============================================================================

# Raster size used for mesh geometries, which only carry a single color
MESH_TEXTURE_SIZE = (1, 1)

# Color used when a mesh color cannot be read (trimesh default gray)
FALLBACK_MESH_COLOR = (102, 102, 102)

# =============================================================================
# Version Information
# =============================================================================

LEVELMAP_VERSION = "0.1.0"
