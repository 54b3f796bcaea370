"""Stage runner.

Runs one pipeline stage as an external process and classifies the
outcome. Process execution sits behind the Invoker protocol so the
pipeline can be driven by a fake in tests.
"""

from __future__ import annotations

import subprocess
import time
from typing import TYPE_CHECKING, Protocol

import structlog
from opentelemetry.trace import Status, StatusCode

from tbcc_core.config import ToolchainConfig
from tbcc_core.models import StageResult, StageStatus
from tbcc_core.observability import span

if TYPE_CHECKING:
    from pathlib import Path

    from tbcc_core.stages import Stage

logger = structlog.get_logger(__name__)


class Invoker(Protocol):
    """Capability to execute one stage.

    Implementations block until the stage exits and return its exit
    status. Failing to launch raises OSError.
    """

    def invoke(self, stage: Stage, input_path: Path, output_path: Path) -> int: ...


class SubprocessInvoker:
    """Invoker backed by the external compiler driver.

    The child inherits stdout and stderr, so compiler diagnostics reach
    the terminal unmodified.

    Attributes:
        config: Toolchain configuration used to build commands
    """

    def __init__(self, config: ToolchainConfig | None = None) -> None:
        self.config = config or ToolchainConfig()

    def invoke(self, stage: Stage, input_path: Path, output_path: Path) -> int:
        command = self.config.command_for(stage, input_path, output_path)
        logger.debug("command_launched", stage=stage.value, command=command)
        completed = subprocess.run(command, check=False)
        return completed.returncode


class StageRunner:
    """Runs a single stage through an Invoker.

    No retries. Stage output is never captured or parsed; only the exit
    status decides success.

    Example:
        >>> runner = StageRunner(SubprocessInvoker())
        >>> result = runner.run(Stage.PREPROCESS, Path("hello.c"), Path("hello.i"))
        >>> result.produced
        True
    """

    def __init__(self, invoker: Invoker) -> None:
        """Initialize the runner.

        Args:
            invoker: Capability used to execute stage commands.
        """
        self.invoker = invoker

    def run(self, stage: Stage, input_path: Path, output_path: Path) -> StageResult:
        """Run one stage and classify the outcome.

        Args:
            stage: Stage to run.
            input_path: Artifact consumed by the stage.
            output_path: Artifact the stage must produce.

        Returns:
            StageResult with PRODUCED or FAILED status.
        """
        log = logger.bind(stage=stage.value)
        start_time = time.monotonic()
        log.info("stage_started", input=str(input_path), output=str(output_path))

        with span(
            f"stage.{stage.value}",
            attributes={"tbcc.input": str(input_path), "tbcc.output": str(output_path)},
        ) as stage_span:
            try:
                returncode: int | None = self.invoker.invoke(stage, input_path, output_path)
            except OSError as e:
                returncode = None
                message = f"Could not launch {stage.value} command: {type(e).__name__}"
                log.error("stage_launch_failed", error=str(e))
            else:
                message = "" if returncode == 0 else f"Exited with status {returncode}"

            if returncode == 0:
                stage_span.set_status(Status(StatusCode.OK))
            else:
                stage_span.set_status(Status(StatusCode.ERROR, message))

        duration_ms = int((time.monotonic() - start_time) * 1000)
        status = StageStatus.PRODUCED if returncode == 0 else StageStatus.FAILED

        if status == StageStatus.PRODUCED:
            log.info("stage_completed", duration_ms=duration_ms)
        else:
            log.warning("stage_failed", returncode=returncode, duration_ms=duration_ms)

        return StageResult(
            stage=stage,
            status=status,
            input_path=input_path,
            output_path=output_path,
            returncode=returncode,
            message=message,
            duration_ms=duration_ms,
        )
