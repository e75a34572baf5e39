"""CLI utility functions for abibuild.

This module provides common utilities used by the CLI including:
- Build mode selection from task names and flags
- Error handling and formatting
- Build summary banners
"""

import sys
from pathlib import Path
from typing import Dict

from abibuild.build import BuildMode, CompileFailedError
from abibuild.config import TargetArch
from abibuild.errors import AbiBuildError, ConfigError


class ModeSelector:
    """Selects the build mode from the command line."""

    @staticmethod
    def select_mode(command: str, debug: bool = False, release: bool = False) -> BuildMode:
        """Select the build mode.

        Explicit --debug/--release win; otherwise the command (task) name
        decides, e.g. "build-debug" builds in debug mode.

        Args:
            command: Command or task name as typed by the user
            debug: --debug was passed
            release: --release was passed

        Returns:
            Selected BuildMode
        """
        if debug:
            return BuildMode.DEBUG
        if release:
            return BuildMode.RELEASE
        return BuildMode.from_task_name(command)


class ErrorFormatter:
    """Formats and displays error messages with ANSI color codes."""

    # ANSI color codes
    RED = "\033[1;31m"
    GREEN = "\033[1;32m"
    YELLOW = "\033[1;33m"
    RESET = "\033[0m"

    @staticmethod
    def print_error(title: str, message: str) -> None:
        """Print formatted error message.

        Args:
            title: Error title (e.g., "Configuration error", "Build failed")
            message: Error message details
        """
        print()
        print(f"{ErrorFormatter.RED}✗ {title}{ErrorFormatter.RESET}")
        print()
        print(message)
        print()

    @staticmethod
    def print_success(message: str) -> None:
        """Print formatted success message."""
        print()
        print(f"{ErrorFormatter.GREEN}✓ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def print_warning(message: str) -> None:
        """Print formatted warning message."""
        print()
        print(f"{ErrorFormatter.YELLOW}✗ {message}{ErrorFormatter.RESET}")

    @staticmethod
    def error_title(error: AbiBuildError) -> str:
        """Get a one-line title for a build error."""
        if isinstance(error, CompileFailedError):
            return f"Compilation failed for {error.arch.value} ({error.arch.abi})"
        if isinstance(error, ConfigError):
            return "Configuration error"
        return "Build failed"

    @staticmethod
    def handle_build_error(error: AbiBuildError) -> None:
        """Print a build error and exit with status 1."""
        ErrorFormatter.print_error(ErrorFormatter.error_title(error), str(error))
        if isinstance(error, ConfigError):
            print("No ABI was built.")
        sys.exit(1)

    @staticmethod
    def handle_keyboard_interrupt() -> None:
        """Handle KeyboardInterrupt with standard formatting."""
        ErrorFormatter.print_warning("Build interrupted")
        sys.exit(130)  # Standard exit code for SIGINT

    @staticmethod
    def handle_unexpected_error(error: Exception, verbose: bool = False) -> None:
        """Handle unexpected errors with standard formatting.

        Args:
            error: The exception to handle
            verbose: Whether to print traceback
        """
        message = f"{type(error).__name__}: {error}"
        ErrorFormatter.print_error("Unexpected error", message)

        if verbose:
            import traceback

            print("Traceback:")
            print(traceback.format_exc())

        sys.exit(1)


class BannerFormatter:
    """Formats build summary banners."""

    DEFAULT_WIDTH = 60
    DEFAULT_BORDER_CHAR = "="

    @staticmethod
    def format_banner(
        message: str,
        width: int = DEFAULT_WIDTH,
        border_char: str = DEFAULT_BORDER_CHAR,
    ) -> str:
        """Format a left-aligned banner with top and bottom borders.

        Args:
            message: The message to display (can be multi-line)
            width: Width of the borders in characters
            border_char: Character to use for borders

        Returns:
            Formatted banner string with borders
        """
        border = border_char * width
        lines = [border]
        lines.extend("  " + line for line in message.split("\n"))
        lines.append(border)
        return "\n".join(lines)

    @staticmethod
    def format_artifacts(artifacts: Dict[TargetArch, Path]) -> str:
        """Format one "abi: path" line per artifact, in matrix order."""
        return "\n".join(
            f"{arch.abi:<12} {artifacts[arch]}" for arch in TargetArch if arch in artifacts
        )


class PathValidator:
    """Validates project paths and directories."""

    @staticmethod
    def validate_project_dir(project_dir: Path) -> None:
        """Validate that project directory exists and is a directory.

        Raises:
            SystemExit: If path doesn't exist or isn't a directory
        """
        if not project_dir.exists():
            print(f"{ErrorFormatter.RED}✗ Error: Path does not exist: {project_dir}{ErrorFormatter.RESET}")
            sys.exit(2)
        if not project_dir.is_dir():
            print(f"{ErrorFormatter.RED}✗ Error: Path is not a directory: {project_dir}{ErrorFormatter.RESET}")
            sys.exit(2)
