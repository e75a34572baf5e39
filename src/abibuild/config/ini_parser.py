"""
abibuild.ini configuration parser.

This module parses the release configuration of a project: the version
string embedded in the produced binaries, the root-implementation
compatibility constants, and the (optional) list of C sources to compile.
"""

import configparser
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from ..errors import ConfigError

CONFIG_FILENAME = "abibuild.ini"

DEFAULT_ARTIFACT = "zygiskd"
DEFAULT_INCLUDE_DIR = "root_impl"

# Compiled as one translation unit, in this order.
DEFAULT_SOURCES: Tuple[str, ...] = (
    "root_impl/apatch.c",
    "root_impl/common.c",
    "root_impl/kernelsu.c",
    "root_impl/magisk.c",
    "companion.c",
    "main.c",
    "utils.c",
    "zygiskd.c",
)


class ReleaseConfigError(ConfigError):
    """Exception raised for abibuild.ini configuration errors."""

    pass


@dataclass(frozen=True)
class ReleaseConfig:
    """
    Version and compatibility constants injected into every build.

    Example abibuild.ini:
        [release]
        version_name = 1.0.0
        min_apatch_version = 10762
        min_ksu_version = 10940
        max_ksu_version = 20000
        min_magisk_version = 26402

        [build]
        artifact = zygiskd
        sources =
            main.c
            utils.c
    """

    version_name: str
    min_apatch_version: int
    min_ksu_version: int
    max_ksu_version: int
    min_magisk_version: int
    artifact: str = DEFAULT_ARTIFACT
    include_dir: str = DEFAULT_INCLUDE_DIR
    sources: Tuple[str, ...] = DEFAULT_SOURCES

    REQUIRED_INT_FIELDS = (
        "min_apatch_version",
        "min_ksu_version",
        "max_ksu_version",
        "min_magisk_version",
    )

    @classmethod
    def from_ini(cls, ini_path: Path) -> "ReleaseConfig":
        """
        Load the release configuration from an INI file.

        Args:
            ini_path: Path to abibuild.ini

        Returns:
            Parsed ReleaseConfig

        Raises:
            ReleaseConfigError: If the file is missing, unparsable, or lacks
                a required field
        """
        if not ini_path.exists():
            raise ReleaseConfigError(f"Configuration file not found: {ini_path}")

        # Values are literal; "$" is legal in version strings
        parser = configparser.ConfigParser(allow_no_value=True, interpolation=None)

        try:
            parser.read(ini_path, encoding="utf-8")
        except configparser.Error as e:
            raise ReleaseConfigError(f"Failed to parse {ini_path}: {e}") from e

        if "release" not in parser:
            raise ReleaseConfigError(f"{ini_path} has no [release] section")

        release = parser["release"]
        missing = [
            key
            for key in ("version_name",) + cls.REQUIRED_INT_FIELDS
            if not (release.get(key) or "").strip()
        ]
        if missing:
            raise ReleaseConfigError(
                f"[release] section of {ini_path} is missing required fields: "
                + ", ".join(missing)
            )

        values = {}
        for key in cls.REQUIRED_INT_FIELDS:
            raw = release[key].strip()
            try:
                values[key] = int(raw)
            except ValueError:
                raise ReleaseConfigError(
                    f"{key} must be an integer, got '{raw}'"
                ) from None

        build = parser["build"] if "build" in parser else {}
        sources = _parse_list(build.get("sources")) or list(DEFAULT_SOURCES)

        return cls(
            version_name=release["version_name"].strip(),
            artifact=(build.get("artifact") or DEFAULT_ARTIFACT).strip(),
            include_dir=(build.get("include_dir") or DEFAULT_INCLUDE_DIR).strip(),
            sources=tuple(sources),
            **values,
        )

    @classmethod
    def from_project(cls, project_dir: Path) -> "ReleaseConfig":
        """Load abibuild.ini from a project directory."""
        return cls.from_ini(project_dir / CONFIG_FILENAME)

    def resolve_sources(self, source_dir: Path) -> List[Path]:
        """
        Resolve the configured sources against the project source directory.

        Args:
            source_dir: Directory the source list is relative to

        Returns:
            Absolute source paths in configured order

        Raises:
            ReleaseConfigError: If any source file does not exist
        """
        paths = [source_dir / rel for rel in self.sources]
        missing = [str(p) for p in paths if not p.is_file()]
        if missing:
            raise ReleaseConfigError(
                "Source files not found:\n  " + "\n  ".join(missing)
            )
        return paths


def _parse_list(value: Optional[str]) -> List[str]:
    """Split a multi-line or comma separated INI value, dropping empties."""
    if not value:
        return []
    items = []
    for line in value.split("\n"):
        for item in line.split(","):
            item = item.strip()
            if item:
                items.append(item)
    return items
