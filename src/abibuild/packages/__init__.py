"""Toolchain management for abibuild.

This module handles locating the installed Android NDK, classifying the
host platform, and resolving the per-architecture clang wrappers.
"""

from .platform_utils import HostPlatform, PlatformDetector
from .toolchain import (
    MissingRootError,
    NDKLocator,
    NoVersionsFoundError,
    RootNotFoundError,
    resolve_toolchain_root,
    select_latest_version,
)
from .toolchain_binaries import CompilerNotFoundError, CompilerResolver, resolve_compiler

__all__ = [
    "HostPlatform",
    "PlatformDetector",
    "MissingRootError",
    "RootNotFoundError",
    "NoVersionsFoundError",
    "NDKLocator",
    "resolve_toolchain_root",
    "select_latest_version",
    "CompilerNotFoundError",
    "CompilerResolver",
    "resolve_compiler",
]
