"""
Pytest configuration for the abibuild test suite.

This configuration enables the --full flag to run integration tests and
provides fake NDK installations for the unit tests.
"""

import stat
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

from abibuild.config import TargetArch

FAKE_CLANG = """#!/bin/sh
prev=""
out=""
for arg in "$@"; do
  if [ "$prev" = "-o" ]; then out="$arg"; fi
  prev="$arg"
done
printf '%s\\n' "$@" > "$out"
echo "warning: fake clang" >&2
"""

FAILING_CLANG = """#!/bin/sh
echo "error: undefined reference to 'main'" >&2
exit 1
"""

RELEASE_INI = """
[release]
version_name = 1.2.3
min_apatch_version = 10762
min_ksu_version = 10940
max_ksu_version = 20000
min_magisk_version = 26402
"""


def pytest_addoption(parser):
    """Add custom command-line options."""
    parser.addoption(
        "--full",
        action="store_true",
        default=False,
        help="Run full test suite including integration tests (slow)",
    )


def pytest_configure(config):
    """Configure pytest based on command-line options."""
    if config.getoption("--full"):
        # Remove the default marker expression that excludes integration tests
        markexpr = config.getoption("-m", "")
        if markexpr == "not integration":
            config.option.markexpr = ""


def write_script(path: Path, content: str) -> Path:
    """Write an executable script, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class FakeNDK:
    """An $ANDROID_HOME tree with fake clang wrappers."""

    def __init__(self, android_home: Path):
        self.android_home = android_home
        self.root = android_home / "ndk"

    @property
    def environ(self) -> Dict[str, str]:
        return {"ANDROID_HOME": str(self.android_home)}

    def add_version(
        self,
        version: str,
        prebuilt_dir: str = "linux-x86_64",
        suffix: str = "",
        archs: Optional[Iterable[TargetArch]] = None,
        failing: Iterable[TargetArch] = (),
    ) -> Path:
        """Install a version with wrappers for the given architectures."""
        ndk_path = self.root / version
        bin_dir = ndk_path / "toolchains" / "llvm" / "prebuilt" / prebuilt_dir / "bin"
        bin_dir.mkdir(parents=True, exist_ok=True)
        failing = set(failing)
        for arch in (list(TargetArch) if archs is None else archs):
            content = FAILING_CLANG if arch in failing else FAKE_CLANG
            write_script(bin_dir / arch.spec.compiler_name(suffix=suffix), content)
        return ndk_path


@pytest.fixture
def fake_ndk(tmp_path):
    """Create an empty $ANDROID_HOME/ndk directory."""
    ndk = FakeNDK(tmp_path / "android-sdk")
    ndk.root.mkdir(parents=True)
    return ndk


@pytest.fixture
def project_dir(tmp_path):
    """Create a project with abibuild.ini and the default source list."""
    from abibuild.config.ini_parser import DEFAULT_SOURCES

    project = tmp_path / "zygiskd"
    src = project / "src"
    for rel in DEFAULT_SOURCES:
        source = src / rel
        source.parent.mkdir(parents=True, exist_ok=True)
        source.write_text("int x;\n")
    (project / "abibuild.ini").write_text(RELEASE_INI)
    return project
