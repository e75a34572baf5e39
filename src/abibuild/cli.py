"""
Command-line interface for abibuild.

This module provides the `abibuild` CLI tool for building native binaries
for every Android ABI.
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

from abibuild import __version__
from abibuild.build import BuildMode, BuildOrchestrator
from abibuild.cli_utils import BannerFormatter, ErrorFormatter, ModeSelector, PathValidator

BUILD_ALIASES = ["build-debug", "build-release"]


@dataclass
class BuildArgs:
    """Arguments for the build command."""

    project_dir: Path
    mode: BuildMode = BuildMode.RELEASE
    verbose: bool = False


def build_command(args: BuildArgs) -> None:
    """Build the native binary for all four Android ABIs.

    Examples:
        abibuild build                  # Release build of the current directory
        abibuild build zygiskd          # Release build of a specific project
        abibuild build --debug          # Debug build
        abibuild build-debug            # Same, selected by task name
        abibuild build --verbose        # Verbose output
    """
    print(f"abibuild v{__version__}")
    print()

    try:
        orchestrator = BuildOrchestrator(verbose=args.verbose)

        if args.verbose:
            print(f"Building project: {args.project_dir}")
            print(f"Mode: {args.mode.value}")
            print()
        else:
            print(f"Building {args.mode.value}...")

        result = orchestrator.build(args.project_dir, args.mode)

        if result.success:
            ErrorFormatter.print_success("Build successful!")
            print(BannerFormatter.format_banner(BannerFormatter.format_artifacts(result.artifacts)))
            print(f"Build time: {result.build_time:.2f}s")
            sys.exit(0)
        else:
            if result.artifacts:
                print(BannerFormatter.format_banner(BannerFormatter.format_artifacts(result.artifacts)))
            ErrorFormatter.handle_build_error(result.error)

    except KeyboardInterrupt:
        ErrorFormatter.handle_keyboard_interrupt()
    except Exception as e:
        ErrorFormatter.handle_unexpected_error(e, args.verbose)


def configure_logging(verbose: bool) -> None:
    """Send abibuild diagnostics to stderr; DEBUG when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """abibuild - native builds for every Android ABI."""
    parser = argparse.ArgumentParser(
        prog="abibuild",
        description="abibuild - native builds for every Android ABI",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"abibuild {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    build_parser = subparsers.add_parser(
        "build",
        aliases=BUILD_ALIASES,
        help="Build binaries for arm64-v8a, armeabi-v7a, x86 and x86_64",
    )
    build_parser.add_argument(
        "project_dir",
        nargs="?",
        type=Path,
        default=Path.cwd(),
        help="Project directory (default: current directory)",
    )
    mode_group = build_parser.add_mutually_exclusive_group()
    mode_group.add_argument(
        "--debug",
        action="store_true",
        help="Debug build (-g -O0 -DDEBUG)",
    )
    mode_group.add_argument(
        "--release",
        action="store_true",
        help="Release build, stripped and optimized (default)",
    )
    build_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show verbose build output",
    )

    parsed_args = parser.parse_args()

    if not parsed_args.command:
        parser.print_help()
        sys.exit(0)

    configure_logging(parsed_args.verbose)
    PathValidator.validate_project_dir(parsed_args.project_dir)

    build_args = BuildArgs(
        project_dir=parsed_args.project_dir,
        mode=ModeSelector.select_mode(
            parsed_args.command, debug=parsed_args.debug, release=parsed_args.release
        ),
        verbose=parsed_args.verbose,
    )
    build_command(build_args)


if __name__ == "__main__":
    main()
