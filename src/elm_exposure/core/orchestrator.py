"""Check orchestrator that coordinates the full checking workflow.

This module ties together all components:
- ModuleWalker for finding module files
- Candidate discovery for finding test names in each module
- The exposure checker for reconciling tests with the exposing clause
- Reporters for output formatting

Modules are checked concurrently in worker threads. A problem with one
module is recorded against that module and never stops the others.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from elm_exposure.core.checker import filter_exposing_safe
from elm_exposure.core.errors import ExposureProblem, UnexposedTestsError
from elm_exposure.core.models import CheckSession, ModuleCheck, ModuleStatus
from elm_exposure.fetcher.candidates import (
    TestModule,
    iter_module_files,
    load_candidates,
    module_name_from_path,
)
from elm_exposure.fetcher.file_walker import create_module_walker
from elm_exposure.reporter.console import create_console_reporter
from elm_exposure.reporter.json_reporter import create_json_reporter

if TYPE_CHECKING:
    from collections.abc import Sequence

    from elm_exposure.core.models import ExposureResult

logger = logging.getLogger(__name__)


class OutputFormat(str, Enum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


@dataclass
class CheckConfig:
    """Configuration for checking.

    Attributes:
        output_format: Output format for results.
        verbose: Whether to show verbose output.
        show_passed: Whether to list modules that passed.
        max_concurrent: Maximum number of modules checked at once.
        file_extensions: Extensions of module files to check.
        skip_paths: Directory names to skip while walking.
        max_file_size_kb: Maximum module file size in KB.
    """

    output_format: OutputFormat = OutputFormat.TABLE
    verbose: bool = False
    show_passed: bool = False
    max_concurrent: int = 8
    file_extensions: list[str] = field(default_factory=lambda: [".elm"])
    skip_paths: list[str] = field(
        default_factory=lambda: ["elm-stuff", "node_modules", ".git"]
    )
    max_file_size_kb: int = 1024


def check_module(module: TestModule) -> ModuleCheck:
    """Check one module and record the outcome.

    Candidates are read from the file when the module has none yet.
    Modules without candidate tests are skipped.

    Args:
        module: The module to check.

    Returns:
        ModuleCheck describing the outcome.
    """
    file_path = str(module.path)
    candidates = module.candidates
    result: ExposureResult | None = None
    problem: ExposureProblem | None = None

    if not candidates:
        try:
            candidates = load_candidates(module.path)
        except ExposureProblem as e:
            problem = e

    if problem is None:
        if not candidates:
            return ModuleCheck(
                module_name=module.module_name,
                file_path=file_path,
                status=ModuleStatus.SKIPPED,
            )
        result, problem = filter_exposing_safe(module.path, candidates, module.module_name)

    if result is not None:
        return ModuleCheck(
            module_name=result.module_name,
            file_path=file_path,
            status=ModuleStatus.PASSED,
            candidates=sorted(candidates),
            accepted=sorted(result.accepted),
        )

    if isinstance(problem, UnexposedTestsError):
        return ModuleCheck(
            module_name=module.module_name,
            file_path=file_path,
            status=ModuleStatus.UNEXPOSED,
            candidates=sorted(problem.accepted | problem.unexposed),
            accepted=sorted(problem.accepted),
            unexposed=sorted(problem.unexposed),
            problem_kind=problem.kind,
            severity=problem.severity,
            message=problem.message,
        )

    return ModuleCheck(
        module_name=module.module_name,
        file_path=file_path,
        status=ModuleStatus.ERROR,
        candidates=sorted(candidates),
        problem_kind=problem.kind if problem else None,
        severity=problem.severity if problem else None,
        message=problem.message if problem else None,
    )


class ExposureOrchestrator:
    """Orchestrates checking a set of test modules.

    Example:
        ```python
        orchestrator = ExposureOrchestrator(CheckConfig(max_concurrent=4))
        session = await orchestrator.check_targets(["tests"])
        orchestrator.print_results(session)
        ```
    """

    def __init__(self, config: CheckConfig | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            config: Check configuration.
        """
        self.config = config or CheckConfig()

        self._console_reporter = create_console_reporter(
            verbose=self.config.verbose,
            show_passed=self.config.show_passed,
        )
        self._json_reporter = create_json_reporter(include_skipped=self.config.verbose)

    def discover_modules(self, path: Path) -> list[TestModule]:
        """Find module files under a directory, or wrap a single file.

        Args:
            path: Directory to walk or a single module file.

        Returns:
            Modules to check, candidates not yet loaded.

        Raises:
            FileNotFoundError: If the path does not exist.
        """
        if path.is_file():
            return [
                TestModule(
                    path=path.resolve(),
                    module_name=module_name_from_path(path, path.parent),
                )
            ]

        walker = create_module_walker(
            path,
            file_extensions=self.config.file_extensions,
            skip_paths=self.config.skip_paths,
            max_file_size_kb=self.config.max_file_size_kb,
        )
        modules = list(iter_module_files(walker))
        logger.debug(
            "Found %d module(s) under %s, skipped %d file(s)",
            len(modules),
            walker.root,
            walker.files_skipped,
        )
        return modules

    async def check_batch(self, modules: Sequence[TestModule]) -> list[ModuleCheck]:
        """Check many modules concurrently.

        Args:
            modules: Modules to check.

        Returns:
            One ModuleCheck per module, in input order.
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrent)

        async def run(module: TestModule) -> ModuleCheck:
            async with semaphore:
                try:
                    return await asyncio.to_thread(check_module, module)
                except Exception as e:
                    logger.exception("Error checking module %s", module.module_name)
                    return ModuleCheck(
                        module_name=module.module_name,
                        file_path=str(module.path),
                        status=ModuleStatus.ERROR,
                        message=str(e),
                    )

        return list(await asyncio.gather(*(run(m) for m in modules)))

    async def check_path(self, path: Path, session: CheckSession) -> None:
        """Check every module under a path, adding results to a session.

        Args:
            path: Directory or single module file.
            session: Session to record results and errors in.
        """
        session.targets.append(str(path))

        if not path.exists():
            session.errors.append(f"Path does not exist: {path}")
            return

        try:
            modules = self.discover_modules(path)
        except OSError as e:
            logger.exception("Error walking %s", path)
            session.errors.append(str(e))
            return

        session.modules.extend(await self.check_batch(modules))

    async def check_targets(self, targets: Sequence[str | Path]) -> CheckSession:
        """Check several directories or files in one session.

        Args:
            targets: Paths to check.

        Returns:
            The finished CheckSession.
        """
        session = CheckSession()

        for target in targets:
            await self.check_path(Path(target), session)

        session.completed_at = datetime.now(UTC)
        logger.info(
            "Checked %d module(s): %d warning(s), %d error(s)",
            session.modules_checked,
            session.warning_count,
            session.error_count,
        )
        return session

    def print_results(self, session: CheckSession) -> None:
        """Print results using the configured reporter."""
        if self.config.output_format == OutputFormat.JSON:
            print(self._json_reporter.generate_json(session))
        else:
            self._console_reporter.print_session(session)

    def write_results(self, session: CheckSession, output_path: Path) -> None:
        """Write results to a file as JSON, whatever the output format."""
        self._json_reporter.write(session, output_path)


def create_orchestrator(
    output_format: str = "table",
    verbose: bool = False,
    show_passed: bool = False,
    max_concurrent: int = 8,
    file_extensions: list[str] | None = None,
    skip_paths: list[str] | None = None,
    max_file_size_kb: int = 1024,
) -> ExposureOrchestrator:
    """Create a configured check orchestrator.

    Args:
        output_format: Output format (table, json).
        verbose: Whether to show verbose output.
        show_passed: Whether to list modules that passed.
        max_concurrent: Maximum number of modules checked at once.
        file_extensions: Extensions of module files to check.
        skip_paths: Directory names to skip while walking.
        max_file_size_kb: Maximum module file size in KB.

    Returns:
        Configured ExposureOrchestrator.
    """
    config = CheckConfig(
        output_format=OutputFormat(output_format),
        verbose=verbose,
        show_passed=show_passed,
        max_concurrent=max_concurrent,
        max_file_size_kb=max_file_size_kb,
    )
    if file_extensions:
        config.file_extensions = file_extensions
    if skip_paths:
        config.skip_paths = skip_paths
    return ExposureOrchestrator(config=config)
