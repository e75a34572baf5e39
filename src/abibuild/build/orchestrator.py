"""
Build orchestration for abibuild projects.

This module coordinates a full multi-ABI build, from locating the NDK to
producing one binary per Android ABI. It integrates all build components:
- Release configuration parsing (abibuild.ini)
- NDK root and version resolution
- Per-architecture compiler resolution
- Flag composition
- Compilation (one clang invocation per ABI)
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import psutil

from ..config.ini_parser import ReleaseConfig
from ..config.target_specs import TargetArch, all_archs
from ..errors import AbiBuildError
from ..packages.platform_utils import HostPlatform, PlatformDetector
from ..packages.toolchain import NDKLocator, resolve_toolchain_root
from ..packages.toolchain_binaries import CompilerResolver
from .compilation_executor import CompilationExecutor, CompileFailedError
from .flag_builder import BuildMode, FlagBuilder

logger = logging.getLogger(__name__)

SOURCE_DIRNAME = "src"
BUILD_DIRNAME = "build"


@dataclass
class BuildResult:
    """Result of a complete build operation."""

    success: bool
    mode: BuildMode
    artifacts: Dict[TargetArch, Path]
    build_time: float
    message: str
    error: Optional[AbiBuildError] = None


@dataclass(frozen=True)
class BuildPlan:
    """Everything resolved before the first compiler runs."""

    ndk_path: Path
    host: HostPlatform
    mode: BuildMode
    compilers: Dict[TargetArch, Path]
    flags: Tuple[str, ...]
    sources: Tuple[Path, ...]
    out_dir: Path
    work_dir: Path
    artifact: str


class BuildOrchestrator:
    """
    Orchestrates the complete multi-ABI build.

    Phases:
    1. Load abibuild.ini and resolve the source list
    2. Resolve the NDK root, classify the host, select the NDK version
    3. Resolve a compiler for every architecture (abort on the first miss)
    4. Compose flags once for the build mode
    5. Compile every architecture, in parallel when jobs > 1

    Example usage:
        orchestrator = BuildOrchestrator()
        result = orchestrator.build(Path("zygiskd"), BuildMode.RELEASE)
        if result.success:
            for arch, path in result.artifacts.items():
                print(f"{arch.abi}: {path}")
    """

    def __init__(
        self,
        jobs: Optional[int] = None,
        verbose: bool = False,
        environ: Optional[Mapping[str, str]] = None,
        os_name: Optional[str] = None,
    ):
        """
        Initialize build orchestrator.

        Args:
            jobs: Maximum parallel compilations (default: CPU count, capped
                at the number of architectures); 1 builds sequentially
            verbose: Enable verbose output
            environ: Environment used to find ANDROID_HOME (default: os.environ)
            os_name: Host OS identity override (default: platform.system())
        """
        self.jobs = jobs
        self.verbose = verbose
        self.environ = environ
        self.os_name = os_name

    def prepare(self, project_dir: Path, mode: BuildMode) -> BuildPlan:
        """
        Resolve configuration, toolchain and flags without compiling.

        Args:
            project_dir: Project root containing abibuild.ini and src/
            mode: Build mode

        Returns:
            BuildPlan for the run

        Raises:
            ConfigError: If configuration, NDK, or any compiler is unusable
        """
        project_dir = Path(project_dir).resolve()

        if self.verbose:
            print("[1/4] Loading release configuration...")
        release_config = ReleaseConfig.from_project(project_dir)
        sources = release_config.resolve_sources(project_dir / SOURCE_DIRNAME)

        if self.verbose:
            print("[2/4] Locating NDK...")
        root = resolve_toolchain_root(self.environ)
        host = PlatformDetector.classify_host(self.os_name)
        logger.debug(f"Host platform: {PlatformDetector.get_platform_info()}")
        ndk_path = NDKLocator(root).locate()
        if self.verbose:
            print(f"      NDK: {ndk_path} ({host.prebuilt_dir})")

        if self.verbose:
            print("[3/4] Resolving compilers...")
        resolver = CompilerResolver(ndk_path, host)
        missing = resolver.find_missing()
        if missing and self.verbose:
            print(f"      Missing compilers: {', '.join(arch.value for arch in missing)}")
        compilers = resolver.resolve_all()

        flags = FlagBuilder(release_config, host).compose_flags(mode)
        logger.debug(f"Flags ({mode.value}): {' '.join(flags)}")

        return BuildPlan(
            ndk_path=ndk_path,
            host=host,
            mode=mode,
            compilers=compilers,
            flags=tuple(flags),
            sources=tuple(sources),
            out_dir=project_dir / BUILD_DIRNAME,
            work_dir=project_dir,
            artifact=release_config.artifact,
        )

    def run(self, project_dir: Path, mode: BuildMode) -> Dict[TargetArch, Path]:
        """
        Build every architecture, raising on the first error.

        Args:
            project_dir: Project root containing abibuild.ini and src/
            mode: Build mode

        Returns:
            Mapping of architecture to produced binary

        Raises:
            ConfigError: If resolution fails (nothing is compiled)
            CompileFailedError: For the first failing architecture in matrix order
        """
        plan = self.prepare(project_dir, mode)
        artifacts, error = self.execute(plan)
        if error is not None:
            raise error
        return artifacts

    def build(self, project_dir: Path, mode: BuildMode) -> BuildResult:
        """
        Execute a complete build.

        Args:
            project_dir: Project root containing abibuild.ini and src/
            mode: Build mode

        Returns:
            BuildResult with status, artifacts and the error if any
        """
        start_time = time.time()
        artifacts: Dict[TargetArch, Path] = {}
        error: Optional[AbiBuildError] = None

        try:
            plan = self.prepare(project_dir, mode)
            artifacts, error = self.execute(plan)
        except AbiBuildError as e:
            error = e

        build_time = time.time() - start_time

        if error is not None:
            return BuildResult(
                success=False,
                mode=mode,
                artifacts=artifacts,
                build_time=build_time,
                message=str(error),
                error=error,
            )

        return BuildResult(
            success=True,
            mode=mode,
            artifacts=artifacts,
            build_time=build_time,
            message=f"Built {len(artifacts)} ABIs in {build_time:.2f}s",
        )

    def execute(
        self, plan: BuildPlan
    ) -> Tuple[Dict[TargetArch, Path], Optional[CompileFailedError]]:
        """
        Compile every architecture of a plan.

        Sequential runs stop at the first failure. Parallel runs let builds
        that already started finish; their artifacts are kept.

        Args:
            plan: Prepared build plan

        Returns:
            Tuple of (artifacts built, first failure in matrix order or None)
        """
        if self.verbose:
            print(f"[4/4] Compiling {len(plan.compilers)} ABIs ({plan.mode.value})...")

        executor = CompilationExecutor(
            plan.artifact, work_dir=plan.work_dir, show_progress=self.verbose
        )
        archs = [arch for arch in all_archs() if arch in plan.compilers]
        workers = self._worker_count(len(archs))
        artifacts: Dict[TargetArch, Path] = {}

        if workers <= 1:
            for arch in archs:
                try:
                    artifacts[arch] = self._build_arch(executor, plan, arch)
                except CompileFailedError as e:
                    return artifacts, e
            return artifacts, None

        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = {
                arch: pool.submit(self._build_arch, executor, plan, arch)
                for arch in archs
            }

        first_error: Optional[CompileFailedError] = None
        for arch in archs:
            try:
                artifacts[arch] = futures[arch].result()
            except CompileFailedError as e:
                logger.debug(f"{arch.value} failed: {e}")
                if first_error is None:
                    first_error = e

        return artifacts, first_error

    @staticmethod
    def _build_arch(executor: CompilationExecutor, plan: BuildPlan, arch: TargetArch) -> Path:
        return executor.build_one(
            arch,
            plan.compilers[arch],
            list(plan.flags),
            list(plan.sources),
            plan.out_dir,
        )

    def _worker_count(self, num_archs: int) -> int:
        if self.jobs is not None and self.jobs > 0:
            return min(self.jobs, num_archs)
        cpus = psutil.cpu_count(logical=True) or 1
        return max(1, min(cpus, num_archs))
