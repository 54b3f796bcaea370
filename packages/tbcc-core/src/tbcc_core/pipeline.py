"""Pipeline controller.

Drives the preprocess, compile and assemble/link stages in order for one
source file. Each intermediate is removed as soon as the next stage has
consumed it; the artifact of the last stage that runs is kept.
"""

from __future__ import annotations

import time
from pathlib import Path

import structlog

from tbcc_core.config import ToolchainConfig
from tbcc_core.errors import ConfigurationError, FilesystemError, StageFailure
from tbcc_core.models import PipelineResult, StageResult
from tbcc_core.modes import PipelineMode
from tbcc_core.naming import artifact_path
from tbcc_core.runner import Invoker, StageRunner, SubprocessInvoker
from tbcc_core.stages import STAGE_ORDER, Stage

logger = structlog.get_logger(__name__)


class PipelineController:
    """Runs the build pipeline for a single input file.

    Holds no state between runs; each call to run() is independent.

    Attributes:
        runner: Stage runner used to execute each stage

    Example:
        >>> controller = PipelineController(SubprocessInvoker())
        >>> result = controller.run(Path("hello.c"), PipelineMode.FULL)
        >>> result.artifact
        PosixPath('hello')
    """

    def __init__(self, invoker: Invoker) -> None:
        """Initialize the controller.

        Args:
            invoker: Capability used to execute stage commands.
        """
        self.runner = StageRunner(invoker)
        self._log = logger.bind(component="pipeline_controller")

    def run(
        self,
        input_path: str | Path,
        mode: PipelineMode = PipelineMode.FULL,
    ) -> PipelineResult:
        """Run stages up to the mode's stop-point.

        Args:
            input_path: Source file to build.
            mode: How far to run.

        Returns:
            PipelineResult whose artifact is the stop-point output.

        Raises:
            StageFailure: A stage exited non-zero or could not be launched.
                Artifacts up to the failing stage's input are left on disk.
            ConfigurationError: A stage output would overwrite the source file.
            FilesystemError: A superseded intermediate could not be removed.
        """
        source = Path(input_path)
        start_time = time.monotonic()
        stop_stage = mode.stop_stage

        self._check_outputs(source, stop_stage)

        self._log.info(
            "pipeline_started",
            input=str(source),
            mode=mode.value,
            stop_stage=stop_stage.value,
        )

        current = source
        results: list[StageResult] = []
        removed: list[Path] = []

        for stage in STAGE_ORDER:
            self._check_input_extension(stage, current)
            output = artifact_path(current, stage.spec.output_extension)

            result = self.runner.run(stage, current, output)
            results.append(result)

            if result.failed:
                self._log.error(
                    "pipeline_failed",
                    stage=stage.value,
                    returncode=result.returncode,
                )
                raise StageFailure(
                    stage,
                    returncode=result.returncode,
                    internal_details=result.message or None,
                )

            # The original source is never an intermediate
            if current != source:
                self._remove_intermediate(current)
                removed.append(current)

            current = output

            if stage == stop_stage:
                break

        total_duration_ms = int((time.monotonic() - start_time) * 1000)

        self._log.info(
            "pipeline_completed",
            artifact=str(current),
            stopped_after=stop_stage.value,
            total_duration_ms=total_duration_ms,
        )

        return PipelineResult(
            input_path=source,
            mode=mode,
            artifact=current,
            stopped_after=stop_stage,
            stages=results,
            removed=removed,
            total_duration_ms=total_duration_ms,
        )

    def _check_outputs(self, source: Path, stop_stage: Stage) -> None:
        """Reject a source file that some stage would write over.

        Args:
            source: Original input file.
            stop_stage: Last stage that will run.

        Raises:
            ConfigurationError: If any planned output path equals the source.
        """
        current = source
        for stage in STAGE_ORDER:
            current = artifact_path(current, stage.spec.output_extension)
            if current == source:
                raise ConfigurationError(
                    f"Stage '{stage.value}' output would overwrite the input file {source}"
                )
            if stage == stop_stage:
                break

    def _remove_intermediate(self, path: Path) -> None:
        """Delete an intermediate that the next stage has consumed.

        Args:
            path: Intermediate artifact to remove.

        Raises:
            FilesystemError: If the file cannot be removed.
        """
        try:
            path.unlink()
        except OSError as e:
            raise FilesystemError(path, "remove", internal_details=str(e)) from e

        self._log.debug("intermediate_removed", path=str(path))

    def _check_input_extension(self, stage: Stage, path: Path) -> None:
        """Warn when a stage input does not carry the expected extension."""
        expected = stage.spec.input_extension
        if expected is not None and path.suffix != f".{expected}":
            self._log.warning(
                "unexpected_input_extension",
                stage=stage.value,
                path=str(path),
                expected=expected,
            )


def run_pipeline(
    input_path: str | Path,
    mode: PipelineMode = PipelineMode.FULL,
    config: ToolchainConfig | None = None,
    invoker: Invoker | None = None,
) -> PipelineResult:
    """Build a source file with the given mode.

    Convenience function that creates a controller and runs it.

    Args:
        input_path: Source file to build.
        mode: How far to run.
        config: Toolchain configuration for the default subprocess invoker.
        invoker: Explicit invoker; overrides config when given.

    Returns:
        PipelineResult for the run.

    Example:
        >>> result = run_pipeline("hello.c", PipelineMode.CODEGEN)
        >>> result.artifact
        PosixPath('hello.s')
    """
    controller = PipelineController(invoker or SubprocessInvoker(config))
    return controller.run(input_path, mode)
