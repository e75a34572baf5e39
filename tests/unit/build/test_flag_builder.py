"""
Unit tests for FlagBuilder.

Tests flag composition per build mode and host-specific version quoting.
"""

import pytest

from abibuild.build.flag_builder import (
    DEBUG_FLAGS,
    RELEASE_FLAGS,
    BuildMode,
    FlagBuilder,
)
from abibuild.config import ReleaseConfig
from abibuild.packages import HostPlatform


@pytest.fixture
def release_config():
    """Release constants used by every test."""
    return ReleaseConfig(
        version_name="1.2.3",
        min_apatch_version=10762,
        min_ksu_version=10940,
        max_ksu_version=20000,
        min_magisk_version=26402,
    )


@pytest.fixture
def builder(release_config):
    return FlagBuilder(release_config, HostPlatform.LINUX)


class TestVersionDefine:
    """Version string quoting differs only on Windows hosts."""

    def test_plain_quoting(self):
        assert FlagBuilder.version_define("1.2.3", HostPlatform.LINUX) == '-DZKSU_VERSION="1.2.3"'
        assert FlagBuilder.version_define("1.2.3", HostPlatform.MAC) == '-DZKSU_VERSION="1.2.3"'

    def test_windows_escaped_quoting(self):
        assert FlagBuilder.version_define("1.2.3", HostPlatform.WINDOWS) == '-DZKSU_VERSION=\\"1.2.3\\"'

    def test_forms_differ_only_in_escaping(self):
        plain = FlagBuilder.version_define("1.2.3", HostPlatform.LINUX)
        escaped = FlagBuilder.version_define("1.2.3", HostPlatform.WINDOWS)

        assert plain != escaped
        assert escaped.replace('\\"', '"') == plain
        assert escaped.count("\\") == 2

    def test_windows_flags_carry_escaped_define(self, release_config):
        flags = FlagBuilder(release_config, HostPlatform.WINDOWS).compose_flags(BuildMode.RELEASE)
        assert '-DZKSU_VERSION=\\"1.2.3\\"' in flags
        assert '-DZKSU_VERSION="1.2.3"' not in flags

    def test_hosts_differ_only_in_version_define(self, release_config):
        linux = FlagBuilder(release_config, HostPlatform.LINUX).compose_flags(BuildMode.DEBUG)
        windows = FlagBuilder(release_config, HostPlatform.WINDOWS).compose_flags(BuildMode.DEBUG)

        differing = [(a, b) for a, b in zip(linux, windows) if a != b]
        assert len(linux) == len(windows)
        assert differing == [('-DZKSU_VERSION="1.2.3"', '-DZKSU_VERSION=\\"1.2.3\\"')]


class TestComposeFlags:
    """Mode flag sets and the shared standard flags."""

    def test_standard_flags(self, builder):
        flags = builder.standard_flags()

        assert flags[:2] == ["-D_GNU_SOURCE", "-std=c99"]
        for flag in ["-Wpedantic", "-Wall", "-Wextra", "-Wconversion", "-Iroot_impl", "-llog"]:
            assert flag in flags
        assert "-DMIN_APATCH_VERSION=10762" in flags
        assert "-DMIN_KSU_VERSION=10940" in flags
        assert "-DMAX_KSU_VERSION=20000" in flags
        assert "-DMIN_MAGISK_VERSION=26402" in flags
        assert flags[-1] == '-DZKSU_VERSION="1.2.3"'

    def test_warnings_do_not_fail_build(self, builder):
        flags = builder.standard_flags()
        assert flags.index("-Wno-error") > flags.index("-Werror")

    def test_release_flags(self, builder):
        flags = builder.compose_flags(BuildMode.RELEASE)

        assert flags[: len(RELEASE_FLAGS)] == ["-Wl,--strip-all", "-flto=thin", "-O3", "-ffast-math"]
        assert "-DDEBUG" not in flags
        assert "-O0" not in flags
        assert "-g" not in flags

    def test_debug_flags(self, builder):
        flags = builder.compose_flags(BuildMode.DEBUG)

        assert flags[: len(DEBUG_FLAGS)] == ["-g", "-O0", "-DDEBUG"]
        assert "-O3" not in flags
        assert "-Wl,--strip-all" not in flags
        assert "-flto=thin" not in flags

    def test_modes_share_only_standard_flags(self, builder):
        release = set(builder.compose_flags(BuildMode.RELEASE))
        debug = set(builder.compose_flags(BuildMode.DEBUG))
        assert release & debug == set(builder.standard_flags())

    def test_custom_include_dir(self, release_config):
        config = ReleaseConfig(
            version_name="1.0",
            min_apatch_version=1,
            min_ksu_version=2,
            max_ksu_version=3,
            min_magisk_version=4,
            include_dir="include",
        )
        flags = FlagBuilder(config, HostPlatform.LINUX).standard_flags()
        assert "-Iinclude" in flags
        assert "-Iroot_impl" not in flags

    def test_compose_returns_fresh_list(self, builder):
        flags = builder.compose_flags(BuildMode.DEBUG)
        flags.append("-Dmutated")
        assert "-Dmutated" not in builder.compose_flags(BuildMode.DEBUG)
        assert DEBUG_FLAGS == ["-g", "-O0", "-DDEBUG"]


class TestBuildMode:
    """Mode selection from task names."""

    @pytest.mark.parametrize("name", ["buildDebug", "build-debug", "DEBUG", "assembleDebugAndStrip"])
    def test_debug_task_names(self, name):
        assert BuildMode.from_task_name(name) is BuildMode.DEBUG

    @pytest.mark.parametrize("name", ["build", "buildAndStrip", "build-release", ""])
    def test_release_task_names(self, name):
        assert BuildMode.from_task_name(name) is BuildMode.RELEASE
