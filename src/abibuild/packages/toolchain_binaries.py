"""Toolchain Binary Finder Utilities.

This module locates and verifies the NDK clang wrappers for each target
architecture.

Binary Naming Conventions:
    - <triple><api>-clang, e.g. aarch64-linux-android34-clang
    - Windows hosts: the same name with a .cmd suffix (wrapper scripts)

Directory Structure:
    The wrappers live in:
    - <ndk>/<version>/toolchains/llvm/prebuilt/<host-prebuilt-dir>/bin/
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..config.target_specs import ANDROID_API_LEVEL, TargetArch, all_archs
from ..errors import ConfigError
from .platform_utils import HostPlatform

logger = logging.getLogger(__name__)


class CompilerNotFoundError(ConfigError):
    """Raised when an architecture's clang wrapper is missing."""

    def __init__(self, arch: TargetArch, path: Path):
        self.arch = arch
        self.path = path
        super().__init__(f"{arch.value} compiler not found at {path}")


class CompilerResolver:
    """Finds and verifies clang wrappers in one NDK version directory."""

    def __init__(
        self,
        ndk_path: Path,
        host: HostPlatform,
        api_level: int = ANDROID_API_LEVEL,
    ):
        """Initialize the resolver.

        Args:
            ndk_path: Selected NDK version directory (root / version)
            host: Host platform class
            api_level: Minimum API level embedded in wrapper names
        """
        self.ndk_path = ndk_path
        self.host = host
        self.api_level = api_level

    @property
    def bin_dir(self) -> Path:
        """Directory holding the clang wrappers for this host."""
        return (
            self.ndk_path
            / "toolchains"
            / "llvm"
            / "prebuilt"
            / self.host.prebuilt_dir
            / "bin"
        )

    def compiler_path(self, arch: TargetArch) -> Path:
        """Get the expected wrapper path for an architecture (not verified)."""
        name = arch.spec.compiler_name(self.api_level, self.host.exe_suffix)
        return self.bin_dir / name

    def resolve_compiler(self, arch: TargetArch) -> Path:
        """Resolve and verify the wrapper for an architecture.

        Args:
            arch: Target architecture

        Returns:
            Path to an existing regular file

        Raises:
            CompilerNotFoundError: If the wrapper is missing or not a file
        """
        path = self.compiler_path(arch)
        if not path.is_file():
            raise CompilerNotFoundError(arch, path)
        logger.debug(f"{arch.value} compiler: {path}")
        return path

    def resolve_all(self, archs: Optional[List[TargetArch]] = None) -> Dict[TargetArch, Path]:
        """Resolve wrappers for every architecture, in order.

        The first missing wrapper aborts resolution; no partial mapping is
        returned.

        Args:
            archs: Architectures to resolve (default: the full matrix)

        Returns:
            Mapping of architecture to wrapper path

        Raises:
            CompilerNotFoundError: For the first architecture without a wrapper
        """
        if archs is None:
            archs = all_archs()
        return {arch: self.resolve_compiler(arch) for arch in archs}

    def find_missing(self, archs: Optional[List[TargetArch]] = None) -> List[TargetArch]:
        """List architectures whose wrapper is missing.

        Returns:
            Architectures in matrix order that would fail resolve_compiler
        """
        if archs is None:
            archs = all_archs()
        return [arch for arch in archs if not self.compiler_path(arch).is_file()]


def resolve_compiler(ndk_path: Path, host: HostPlatform, arch: TargetArch) -> Path:
    """Resolve one architecture's clang wrapper.

    See CompilerResolver.resolve_compiler.
    """
    return CompilerResolver(ndk_path, host).resolve_compiler(arch)
