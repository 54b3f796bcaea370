"""Pipeline result models.

Models for representing the outcome of each stage and of a whole run.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from tbcc_core.modes import PipelineMode
from tbcc_core.stages import Stage


class StageStatus(str, Enum):
    """Outcome of a single stage.

    Attributes:
        PRODUCED: The process exited with status 0
        FAILED: The process exited non-zero or could not be launched
    """

    PRODUCED = "produced"
    FAILED = "failed"


class StageResult(BaseModel):
    """Result of a single stage invocation.

    Attributes:
        stage: Stage that ran
        status: Stage status
        input_path: File the stage consumed
        output_path: File the stage was asked to write
        returncode: Process exit status (None if the process never started)
        message: Human-readable result message
        duration_ms: Stage duration in milliseconds

    Example:
        >>> result = StageResult(
        ...     stage=Stage.COMPILE,
        ...     status=StageStatus.PRODUCED,
        ...     input_path=Path("hello.i"),
        ...     output_path=Path("hello.s"),
        ...     returncode=0,
        ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stage: Stage = Field(..., description="Stage")
    status: StageStatus = Field(..., description="Stage status")
    input_path: Path = Field(..., description="Stage input")
    output_path: Path = Field(..., description="Stage output")
    returncode: int | None = Field(default=None, description="Process exit status")
    message: str = Field(default="", description="Result message")
    duration_ms: int = Field(default=0, ge=0, description="Duration in milliseconds")

    @property
    def produced(self) -> bool:
        """Check if the stage produced its artifact."""
        return self.status == StageStatus.PRODUCED

    @property
    def failed(self) -> bool:
        """Check if the stage failed."""
        return self.status == StageStatus.FAILED


class PipelineResult(BaseModel):
    """Result of a successful pipeline run.

    Attributes:
        input_path: Original source file
        mode: Mode the pipeline ran in
        artifact: Final artifact (the stop-point output)
        stopped_after: Last stage that ran
        stages: Stage results in execution order
        removed: Intermediates deleted while advancing
        total_duration_ms: Total duration in milliseconds
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    input_path: Path = Field(..., description="Source file")
    mode: PipelineMode = Field(..., description="Pipeline mode")
    artifact: Path = Field(..., description="Final artifact")
    stopped_after: Stage = Field(..., description="Last stage run")
    stages: list[StageResult] = Field(default_factory=list, description="Stage results")
    removed: list[Path] = Field(default_factory=list, description="Removed intermediates")
    total_duration_ms: int = Field(default=0, ge=0, description="Total duration")

    @property
    def stopped_early(self) -> bool:
        """Check if the mode halted the pipeline before linking."""
        return self.stopped_after != Stage.ASSEMBLE_LINK

    def summary(self) -> str:
        """One-line description of the run for CLI output."""
        if self.stopped_early:
            return f"Stopped after {self.stopped_after.value}: {self.artifact}"
        return f"Compiled to {self.artifact}"
