"""
Build system components for abibuild.

This module provides the build system implementation including:
- Flag composition per build mode
- Compilation (one NDK clang invocation per ABI)
- Build orchestration across the ABI matrix
"""

from .compilation_executor import CompilationExecutor, CompileFailedError, CompilerInvocation
from .flag_builder import BuildMode, FlagBuilder
from .orchestrator import BuildOrchestrator, BuildPlan, BuildResult

__all__ = [
    "CompilationExecutor",
    "CompileFailedError",
    "CompilerInvocation",
    "BuildMode",
    "FlagBuilder",
    "BuildOrchestrator",
    "BuildPlan",
    "BuildResult",
]
