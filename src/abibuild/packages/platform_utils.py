"""Platform Detection Utilities.

This module classifies the host operating system for NDK toolchain
selection. The classification drives two things:
    - the prebuilt toolchain directory (darwin-x86_64, windows-x86_64, linux-x86_64)
    - the clang wrapper suffix (Windows ships .cmd wrapper scripts)
"""

import platform
from enum import Enum
from typing import Optional


class HostPlatform(Enum):
    """Host classes understood by the NDK prebuilt layout."""

    MAC = "mac"
    WINDOWS = "windows"
    LINUX = "linux"

    @property
    def prebuilt_dir(self) -> str:
        """Name of the toolchains/llvm/prebuilt subdirectory for this host."""
        return _PREBUILT_DIRS[self]

    @property
    def exe_suffix(self) -> str:
        """Suffix of the clang wrapper executables on this host."""
        return ".cmd" if self is HostPlatform.WINDOWS else ""

    @property
    def is_windows(self) -> bool:
        return self is HostPlatform.WINDOWS


_PREBUILT_DIRS = {
    HostPlatform.MAC: "darwin-x86_64",
    HostPlatform.WINDOWS: "windows-x86_64",
    HostPlatform.LINUX: "linux-x86_64",
}


class PlatformDetector:
    """Detects the current host class for toolchain selection."""

    @staticmethod
    def classify_host(os_name: Optional[str] = None) -> HostPlatform:
        """Classify a host OS identity string.

        Matching is a case-insensitive substring test. Anything containing
        "win" is Windows; the "win" inside "darwin" does not count. Then
        "mac" or "darwin" means macOS. Everything else is treated as Linux.

        Args:
            os_name: OS identity string (default: platform.system())

        Returns:
            The HostPlatform for the string
        """
        if os_name is None:
            os_name = platform.system()

        name = os_name.lower()
        if _has_windows_marker(name):
            return HostPlatform.WINDOWS
        if "mac" in name or "darwin" in name:
            return HostPlatform.MAC
        return HostPlatform.LINUX

    @staticmethod
    def get_platform_info() -> dict:
        """Get detailed information about the current platform.

        Returns:
            Dictionary with the raw system/machine strings and the host class
        """
        host = PlatformDetector.classify_host()
        return {
            "system": platform.system(),
            "machine": platform.machine(),
            "platform": platform.platform(),
            "python_version": platform.python_version(),
            "host": host.value,
            "prebuilt_dir": host.prebuilt_dir,
        }


def _has_windows_marker(name: str) -> bool:
    """True if "win" occurs anywhere except as the tail of "darwin".

    platform.system() reports macOS as "Darwin", so that one occurrence is
    exempt from the Windows rule.
    """
    start = name.find("win")
    while start != -1:
        if name[max(0, start - 3):start + 3] != "darwin":
            return True
        start = name.find("win", start + 1)
    return False
