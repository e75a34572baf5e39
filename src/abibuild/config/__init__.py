"""Configuration parsing modules for abibuild."""

from .ini_parser import CONFIG_FILENAME, ReleaseConfig, ReleaseConfigError
from .target_specs import ANDROID_API_LEVEL, ARCH_SPECS, ArchSpec, TargetArch, all_archs

__all__ = [
    "CONFIG_FILENAME",
    "ReleaseConfig",
    "ReleaseConfigError",
    "ANDROID_API_LEVEL",
    "ARCH_SPECS",
    "ArchSpec",
    "TargetArch",
    "all_archs",
]
