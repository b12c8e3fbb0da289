"""Minimal CLI for converting levels to SVG maps.

Usage examples:
  python3 cli.py convert maps/e1m2.json
  python3 cli.py convert maps/courtyard.glb --axis y --out-dir builds --label courtyard_side --summary
  python3 cli.py config
"""

import argparse
import sys
from pathlib import Path

from config import check_config, config
from levelmap.constants import LEVELMAP_VERSION
from levelmap.convert import convert
from levelmap.errors import LevelMapError
from levelmap.io import load_level, save_svg
from levelmap.projection import ProjectionAxis
from levelmap.raster import TextureScale


def _convert(level_path: Path, axis: ProjectionAxis, out_dir: Path, label: str | None, scale: TextureScale,
             padding: float, workers: int, verbose: bool, summary: bool):
    level, provider = load_level(level_path)
    result = convert(
        level,
        provider,
        axis=axis,
        scale=scale,
        padding=padding,
        workers=workers,
        reporter=print if verbose else None,
    )
    path = save_svg(result.document, out_dir, label or level_path.stem)

    if summary:
        print(
            f"Faces: {len(level.faces)} | Drawn: {len(result.drawable_faces)}"
            f" | Textures: {len(result.color_table)} | Axis: {axis.name} | Output: {path}"
        )


def main():
    parser = argparse.ArgumentParser(description="LevelMap CLI: flat SVG maps from 3D levels")
    parser.add_argument("--version", action="version", version=f"%(prog)s {LEVELMAP_VERSION}")
    sub = parser.add_subparsers(dest="command", required=True)

    conv = sub.add_parser("convert", help="Convert a level (JSON or mesh file) to an SVG map")
    conv.add_argument("level", type=Path, help="Level file (.json, or any mesh format trimesh loads)")
    conv.add_argument(
        "--axis",
        choices=["x", "y", "z"],
        default=config.DEFAULT_AXIS.value,
        help="Projection axis (z = top-down)",
    )
    conv.add_argument("--out-dir", type=Path, default=config.OUTPUT_DIR, help="Output directory")
    conv.add_argument("--label", default=None, help="Output name (default: level file name)")
    conv.add_argument(
        "--scale",
        choices=[scale.name.lower() for scale in TextureScale],
        default=config.TEXTURE_SCALE.name.lower(),
        help="Texture downsample scale for color sampling",
    )
    conv.add_argument("--padding", type=float, default=config.VIEWBOX_PADDING, help="Margin around the map")
    conv.add_argument("--workers", type=int, default=config.SAMPLE_WORKERS, help="Color sampling threads")
    conv.add_argument("--verbose", action="store_true", default=config.VERBOSE,
                      help="Print depth range and texture of every drawn face group")
    conv.add_argument("--summary", action="store_true", help="Print counts after conversion")

    sub.add_parser("config", help="Print the active configuration")

    args = parser.parse_args()

    if args.command == "config":
        print(config.get_summary())
        check_config()
        return

    if args.command == "convert":
        check_config()
        try:
            _convert(
                args.level,
                ProjectionAxis.parse(args.axis),
                args.out_dir,
                args.label,
                TextureScale.parse(args.scale),
                args.padding,
                max(1, args.workers),
                args.verbose,
                args.summary,
            )
        except (LevelMapError, FileNotFoundError) as e:
            if config.DEBUG:
                raise
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
