"""
Target architecture specifications for Android NDK builds.

This module centralizes the fixed build matrix: every architecture the
orchestrator produces a binary for, the clang target triple used to pick
the NDK compiler wrapper, and the ABI directory the binary lands in.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

# Minimum Android API level baked into the clang wrapper file names
# (e.g. aarch64-linux-android34-clang).
ANDROID_API_LEVEL = 34


class TargetArch(Enum):
    """Architectures in the build matrix, in build order."""

    AARCH64 = "aarch64"
    ARMV7A = "armv7a"
    X86 = "x86"
    X86_64 = "x86_64"

    @property
    def spec(self) -> "ArchSpec":
        return ARCH_SPECS[self]

    @property
    def triple(self) -> str:
        return ARCH_SPECS[self].triple

    @property
    def abi(self) -> str:
        return ARCH_SPECS[self].abi


@dataclass(frozen=True)
class ArchSpec:
    """Compiler and output naming for one architecture."""

    triple: str  # clang target triple prefix of the wrapper name
    abi: str  # Android ABI identifier, used as output directory name

    def compiler_name(self, api_level: int = ANDROID_API_LEVEL, suffix: str = "") -> str:
        """
        Get the file name of the NDK clang wrapper for this architecture.

        Args:
            api_level: Minimum Android API level embedded in the name
            suffix: Host executable suffix ('' or '.cmd')

        Returns:
            Wrapper file name, e.g. 'armv7a-linux-androideabi34-clang'
        """
        return f"{self.triple}{api_level}-clang{suffix}"


ARCH_SPECS: Dict[TargetArch, ArchSpec] = {
    TargetArch.AARCH64: ArchSpec(triple="aarch64-linux-android", abi="arm64-v8a"),
    TargetArch.ARMV7A: ArchSpec(triple="armv7a-linux-androideabi", abi="armeabi-v7a"),
    TargetArch.X86: ArchSpec(triple="i686-linux-android", abi="x86"),
    TargetArch.X86_64: ArchSpec(triple="x86_64-linux-android", abi="x86_64"),
}


def all_archs() -> List[TargetArch]:
    """
    Get every architecture of the build matrix in build order.

    Returns:
        [AARCH64, ARMV7A, X86, X86_64]
    """
    return list(TargetArch)
