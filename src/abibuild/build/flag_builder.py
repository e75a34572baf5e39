"""Compilation Flag Builder.

This module builds the clang argument list shared by every architecture.

Design:
    - Standard flags (language, warnings, include dir, log library) are always present
    - Compatibility constants and the version string are injected as defines
    - Release and debug each add their own mutually exclusive flag set
    - The version define is quoted per host (Windows .cmd wrappers re-parse arguments)
"""

from enum import Enum
from typing import List

from ..config.ini_parser import ReleaseConfig
from ..packages.platform_utils import HostPlatform


class BuildMode(Enum):
    """Build flavour selecting optimization and debug flags."""

    DEBUG = "debug"
    RELEASE = "release"

    @classmethod
    def from_task_name(cls, task_name: str) -> "BuildMode":
        """Pick the mode from a task or command name.

        Any name containing "debug" (any case) selects DEBUG.

        Example:
            >>> BuildMode.from_task_name("buildDebug")
            <BuildMode.DEBUG: 'debug'>
        """
        return cls.DEBUG if "debug" in task_name.lower() else cls.RELEASE


VERSION_DEFINE = "ZKSU_VERSION"

WARNING_FLAGS = [
    "-Wpedantic",
    "-Wall",
    "-Wextra",
    "-Werror",
    "-Wformat",
    "-Wuninitialized",
    "-Wshadow",
    "-Wno-zero-length-array",
    "-Wconversion",
    "-Wno-c23-extensions",
    "-Wno-error=fixed-enum-extension",
]

RELEASE_FLAGS = ["-Wl,--strip-all", "-flto=thin", "-O3", "-ffast-math"]

DEBUG_FLAGS = ["-g", "-O0", "-DDEBUG"]


class FlagBuilder:
    """Builds compilation flags from the release configuration.

    This class handles:
    - Standard language/warning/include/link flags
    - Compatibility and version defines
    - Mode-specific optimization or debug flags
    """

    def __init__(self, release_config: ReleaseConfig, host: HostPlatform):
        """Initialize flag builder.

        Args:
            release_config: Version and compatibility constants
            host: Host platform class (affects version define quoting)
        """
        self.release_config = release_config
        self.host = host

    @staticmethod
    def version_define(version_name: str, host: HostPlatform) -> str:
        """Build the version string define for a host.

        Windows compilers are .cmd wrappers run through cmd.exe, which strips
        one level of quoting, so the quotes are escaped once more there.

        Example:
            >>> FlagBuilder.version_define("1.2.3", HostPlatform.LINUX)
            '-DZKSU_VERSION="1.2.3"'
            >>> FlagBuilder.version_define("1.2.3", HostPlatform.WINDOWS)
            '-DZKSU_VERSION=\\\\"1.2.3\\\\"'
        """
        if host.is_windows:
            return f'-D{VERSION_DEFINE}=\\"{version_name}\\"'
        return f'-D{VERSION_DEFINE}="{version_name}"'

    def standard_flags(self) -> List[str]:
        """Flags present in every build mode."""
        cfg = self.release_config
        flags = ["-D_GNU_SOURCE", "-std=c99"]
        flags.extend(WARNING_FLAGS)
        flags.extend([f"-I{cfg.include_dir}", "-llog"])
        # Warnings are reported but never fail the build
        flags.append("-Wno-error")
        flags.extend(
            [
                f"-DMIN_APATCH_VERSION={cfg.min_apatch_version}",
                f"-DMIN_KSU_VERSION={cfg.min_ksu_version}",
                f"-DMAX_KSU_VERSION={cfg.max_ksu_version}",
                f"-DMIN_MAGISK_VERSION={cfg.min_magisk_version}",
                self.version_define(cfg.version_name, self.host),
            ]
        )
        return flags

    @staticmethod
    def mode_flags(mode: BuildMode) -> List[str]:
        """Flags specific to one build mode."""
        if mode is BuildMode.DEBUG:
            return list(DEBUG_FLAGS)
        return list(RELEASE_FLAGS)

    def compose_flags(self, mode: BuildMode) -> List[str]:
        """Compose the full argument list for a build mode.

        Args:
            mode: DEBUG or RELEASE

        Returns:
            Mode flags followed by the standard flags
        """
        return self.mode_flags(mode) + self.standard_flags()
