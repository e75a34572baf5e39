"""Compilation Executor.

This module runs one clang invocation per architecture via subprocess.

Design:
    - Wraps subprocess.run for compilation commands
    - All sources are compiled and linked in a single invocation
    - No timeout; a hung compiler is not supervised
    - Non-zero exit status is reported with the captured compiler output
"""

import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ..config.target_specs import TargetArch
from ..errors import BuildError

logger = logging.getLogger(__name__)


class CompileFailedError(BuildError):
    """Raised when the compiler exits with a non-zero status."""

    def __init__(self, arch: TargetArch, diagnostics: str):
        self.arch = arch
        self.diagnostics = diagnostics
        super().__init__(f"Compilation failed for {arch.value}\n{diagnostics}")


@dataclass(frozen=True)
class CompilerInvocation:
    """A fully resolved compiler command."""

    executable: Path
    arguments: Tuple[str, ...]
    sources: Tuple[Path, ...]
    output_path: Path

    def command_line(self) -> List[str]:
        """Get the argv: compiler, -o output, flags, then sources."""
        cmd = [str(self.executable), "-o", str(self.output_path)]
        cmd.extend(self.arguments)
        cmd.extend(str(src) for src in self.sources)
        return cmd


class CompilationExecutor:
    """Executes per-architecture compilations.

    This class handles:
    - Creating the ABI output directory
    - Running the compiler subprocess
    - Reporting failures with captured diagnostics
    """

    def __init__(
        self,
        artifact_name: str,
        work_dir: Optional[Path] = None,
        show_progress: bool = True,
    ):
        """Initialize compilation executor.

        Args:
            artifact_name: File name of the produced binary
            work_dir: Working directory of the compiler (relative -I paths)
            show_progress: Whether to show compilation progress
        """
        self.artifact_name = artifact_name
        self.work_dir = work_dir
        self.show_progress = show_progress

    def make_invocation(
        self,
        arch: TargetArch,
        compiler: Path,
        flags: Sequence[str],
        sources: Sequence[Path],
        out_dir: Path,
    ) -> CompilerInvocation:
        """Build the invocation for one architecture.

        Args:
            arch: Target architecture
            compiler: Resolved clang wrapper
            flags: Composed compiler flags
            sources: Source files, in translation unit order
            out_dir: Build root; the binary goes to out_dir/<abi>/

        Returns:
            CompilerInvocation writing out_dir/<abi>/<artifact_name>
        """
        return CompilerInvocation(
            executable=compiler,
            arguments=tuple(flags),
            sources=tuple(sources),
            output_path=out_dir / arch.abi / self.artifact_name,
        )

    def build_one(
        self,
        arch: TargetArch,
        compiler: Path,
        flags: Sequence[str],
        sources: Sequence[Path],
        out_dir: Path,
    ) -> Path:
        """Compile and link the binary for one architecture.

        Args:
            arch: Target architecture
            compiler: Resolved clang wrapper
            flags: Composed compiler flags
            sources: Source files, in translation unit order
            out_dir: Build root; the binary goes to out_dir/<abi>/

        Returns:
            Path to the produced binary

        Raises:
            CompileFailedError: If the compiler exits non-zero or cannot be started
        """
        invocation = self.make_invocation(arch, compiler, flags, sources, out_dir)
        invocation.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.execute(arch, invocation)
        return invocation.output_path

    def execute(self, arch: TargetArch, invocation: CompilerInvocation) -> None:
        """Run a prepared invocation.

        Raises:
            CompileFailedError: If the compiler exits non-zero or cannot be started
        """
        cmd = invocation.command_line()

        if self.show_progress:
            print(f"Compiling {arch.abi}...")
        logger.debug(f"[{arch.value}] {subprocess.list2cmdline(cmd)}")

        try:
            result = subprocess.run(
                cmd,
                cwd=self.work_dir,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            raise CompileFailedError(arch, f"Failed to start {invocation.executable}: {e}") from e

        if result.returncode != 0:
            diagnostics = f"exit status: {result.returncode}\n"
            diagnostics += f"stderr: {result.stderr}\n"
            diagnostics += f"stdout: {result.stdout}"
            raise CompileFailedError(arch, diagnostics)

        # Source-level warnings pass through without failing the build
        if self.show_progress and result.stderr:
            print(result.stderr)
