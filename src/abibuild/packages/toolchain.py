"""Toolchain management for the Android NDK.

This module locates an installed NDK: it resolves the toolchain root from
the environment and picks one NDK version out of the versions installed
under it. Nothing here downloads or modifies the NDK tree.
"""

import logging
import os
from pathlib import Path
from typing import List, Mapping, Optional

from ..errors import ConfigError

logger = logging.getLogger(__name__)

ANDROID_HOME_VAR = "ANDROID_HOME"
NDK_SUBDIR = "ndk"


class MissingRootError(ConfigError):
    """Raised when the toolchain root is not configured."""

    pass


class RootNotFoundError(ConfigError):
    """Raised when the configured toolchain root does not exist."""

    def __init__(self, root: Path):
        self.root = root
        super().__init__(f"NDK not found at {root}")


class NoVersionsFoundError(ConfigError):
    """Raised when the toolchain root holds no version directories."""

    def __init__(self, root: Path):
        self.root = root
        super().__init__(f"No NDK versions installed under {root}")


def resolve_toolchain_root(environ: Optional[Mapping[str, str]] = None) -> Path:
    """Resolve the NDK root directory from the environment.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Absolute path of $ANDROID_HOME/ndk

    Raises:
        MissingRootError: If ANDROID_HOME is unset or empty
        RootNotFoundError: If $ANDROID_HOME/ndk does not exist
    """
    if environ is None:
        environ = os.environ

    android_home = environ.get(ANDROID_HOME_VAR)
    if not android_home:
        raise MissingRootError(f"{ANDROID_HOME_VAR} not set")

    root = Path(android_home).absolute() / NDK_SUBDIR
    if not root.is_dir():
        raise RootNotFoundError(root)

    return root


class NDKLocator:
    """Selects the NDK version to build with.

    Versions are the immediate subdirectories of the root. The greatest name
    in plain string order wins, so "9.0" beats "10.0". Callers relying on
    side-by-side NDKs with different major version widths should keep only
    one installed.
    """

    def __init__(self, root: Path):
        """Initialize the locator.

        Args:
            root: NDK root directory (e.g. $ANDROID_HOME/ndk)
        """
        self.root = root

    def list_versions(self) -> List[str]:
        """List installed version directory names in ascending string order."""
        return sorted(item.name for item in self.root.iterdir() if item.is_dir())

    def select_latest_version(self) -> str:
        """Select the lexicographically greatest version directory.

        Returns:
            Version directory name

        Raises:
            NoVersionsFoundError: If the root holds no directories
        """
        versions = self.list_versions()
        if not versions:
            raise NoVersionsFoundError(self.root)
        return versions[-1]

    def locate(self) -> Path:
        """Get the path of the selected NDK version.

        Returns:
            root / selected version
        """
        version = self.select_latest_version()
        ndk_path = self.root / version
        logger.debug(f"Selected NDK {version} at {ndk_path}")
        return ndk_path


def select_latest_version(root: Path) -> str:
    """Select the NDK version directory to use under root.

    See NDKLocator.select_latest_version.
    """
    return NDKLocator(root).select_latest_version()
