"""
LevelMap Configuration Module

Centralized configuration management for the LevelMap converter.
Loads settings from environment variables with sensible defaults.

Usage:
    from config import config
    output_dir = config.OUTPUT_DIR
    axis = config.DEFAULT_AXIS
"""

import os
from pathlib import Path

from dotenv import load_dotenv

from levelmap.constants import (
    DEFAULT_OUTPUT_DIR,
    DEFAULT_TEXTURE_SCALE,
    VIEWBOX_PADDING,
)
from levelmap.projection import ProjectionAxis
from levelmap.raster import TextureScale

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent / '.env'
if env_path.exists():
    load_dotenv(env_path)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ('true', '1', 'yes')


class Config:
    """
    Configuration class for LevelMap.

    Attributes are loaded from environment variables with fallback defaults.
    """

    # =============================================================================
    # Conversion Defaults
    # =============================================================================

    @property
    def DEFAULT_AXIS(self) -> ProjectionAxis:
        """Projection axis (X, Y, Z); falls back to Z (top-down)"""
        try:
            return ProjectionAxis.parse(os.getenv('DEFAULT_AXIS', 'Z'))
        except ValueError:
            return ProjectionAxis.Z

    @property
    def TEXTURE_SCALE(self) -> TextureScale:
        """Downsample scale for color sampling (FULL, HALF, QUARTER, EIGHTH)"""
        try:
            return TextureScale.parse(os.getenv('TEXTURE_SCALE', DEFAULT_TEXTURE_SCALE))
        except ValueError:
            return TextureScale[DEFAULT_TEXTURE_SCALE]

    @property
    def VIEWBOX_PADDING(self) -> float:
        """Margin around the projected extent, in map units"""
        try:
            return float(os.getenv('VIEWBOX_PADDING', str(VIEWBOX_PADDING)))
        except ValueError:
            return VIEWBOX_PADDING

    # =============================================================================
    # File Paths
    # =============================================================================

    @property
    def OUTPUT_DIR(self) -> Path:
        """Directory SVG maps are written to (created on save)"""
        return Path(os.getenv('OUTPUT_DIR', DEFAULT_OUTPUT_DIR))

    # =============================================================================
    # Performance Settings
    # =============================================================================

    @property
    def SAMPLE_WORKERS(self) -> int:
        """Threads used for texture color sampling"""
        try:
            return int(os.getenv('SAMPLE_WORKERS', '1'))
        except ValueError:
            return 1

    # =============================================================================
    # Debug/Development
    # =============================================================================

    @property
    def DEBUG(self) -> bool:
        """Enable debug mode"""
        return _env_flag('DEBUG', 'False')

    @property
    def VERBOSE(self) -> bool:
        """Print the depth range summary after each conversion"""
        return _env_flag('VERBOSE', 'False')

    # =============================================================================
    # Helper Methods
    # =============================================================================

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of warnings/errors.

        Returns:
            List of warning/error messages (empty if all OK)
        """
        issues = []

        axis = os.getenv('DEFAULT_AXIS')
        if axis is not None and axis.strip().lower() not in ('x', 'y', 'z'):
            issues.append(f"DEFAULT_AXIS must be X, Y or Z (got '{axis}'), using Z")

        scale = os.getenv('TEXTURE_SCALE')
        if scale is not None and scale.strip().upper() not in TextureScale.__members__:
            issues.append(f"Unknown TEXTURE_SCALE '{scale}', using {DEFAULT_TEXTURE_SCALE}")

        padding = os.getenv('VIEWBOX_PADDING', str(VIEWBOX_PADDING))
        try:
            if float(padding) < 0:
                issues.append("VIEWBOX_PADDING must not be negative")
        except ValueError:
            issues.append(f"VIEWBOX_PADDING is not a number: {padding}")

        workers = os.getenv('SAMPLE_WORKERS', '1')
        try:
            if int(workers) < 1:
                issues.append("SAMPLE_WORKERS must be at least 1")
        except ValueError:
            issues.append(f"SAMPLE_WORKERS is not an integer: {workers}")

        if self.OUTPUT_DIR.exists() and not self.OUTPUT_DIR.is_dir():
            issues.append(f"Output path is not a directory: {self.OUTPUT_DIR}")

        return issues

    def get_summary(self) -> str:
        """
        Get human-readable configuration summary.

        Returns:
            Formatted configuration summary string
        """
        lines = [
            "LevelMap Configuration:",
            f"  Output Dir: {self.OUTPUT_DIR}",
            "",
            "Defaults:",
            f"  Axis: {self.DEFAULT_AXIS.name}",
            f"  Texture scale: {self.TEXTURE_SCALE.name}",
            f"  Padding: {self.VIEWBOX_PADDING}",
            "",
            "Performance:",
            f"  Sample workers: {self.SAMPLE_WORKERS}",
            "",
            "Debug:",
            f"  Debug mode: {self.DEBUG}",
            f"  Verbose: {self.VERBOSE}",
        ]
        return "\n".join(lines)


# Global config instance
config = Config()


def check_config():
    """
    Check configuration and print warnings.
    Call this at application startup.
    """
    issues = config.validate()
    if issues:
        print("Configuration Warnings:")
        for issue in issues:
            print(f"   - {issue}")
        print()


if __name__ == "__main__":
    # Allow running as script to check configuration
    print(config.get_summary())
    print()

    issues = config.validate()
    if issues:
        print("Issues found:")
        for issue in issues:
            print(f"   - {issue}")
    else:
        print("Configuration valid!")
