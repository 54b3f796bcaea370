"""Custom exception hierarchy for tbcc-core.

This module defines the exception classes raised by the build pipeline:
- TbccError: Base exception for all tbcc-related errors
- ConfigurationError: Raised before any stage runs (mode flags, toolchain config)
- PipelineError: Base for failures while the pipeline is running
- StageFailure: An external stage process failed or could not be launched
- FilesystemError: An intermediate artifact could not be removed

User-facing messages are safe to display. Technical details are logged
internally via structlog and never shown to the user.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

    from tbcc_core.stages import Stage

logger = structlog.get_logger(__name__)


class TbccError(Exception):
    """Base exception for tbcc.

    Args:
        user_message: Safe message to display to the user.
        internal_details: Optional technical details for logging. This is
            logged internally but never exposed to the user.

    Example:
        >>> raise TbccError(
        ...     "Build failed",
        ...     internal_details="gcc exited with status 4",
        ... )
    """

    def __init__(
        self,
        user_message: str,
        *,
        internal_details: str | None = None,
    ) -> None:
        """Initialize TbccError with user message and optional internal details.

        Args:
            user_message: Safe message to display to the user.
            internal_details: Technical details for internal logging only.
        """
        super().__init__(user_message)
        self.user_message = user_message

        if internal_details:
            logger.error(
                "tbcc_error",
                error_type=self.__class__.__name__,
                user_message=user_message,
                internal_details=internal_details,
            )


class ConfigurationError(TbccError):
    """Raised when the requested run is misconfigured.

    Use this exception when:
    - More than one mutually exclusive mode flag is supplied
    - The toolchain configuration file is missing or invalid
    - A stage output would overwrite the source file

    No stage has been started when this is raised.

    Attributes:
        file_path: Path to the configuration file (if any).
    """

    def __init__(
        self,
        user_message: str,
        *,
        file_path: str | None = None,
        internal_details: str | None = None,
    ) -> None:
        full_message = f"{user_message} (in {file_path})" if file_path else user_message
        super().__init__(full_message, internal_details=internal_details)
        self.file_path = file_path


class PipelineError(TbccError):
    """Base class for failures that abort a running pipeline.

    Every pipeline error is terminal for the current input file.
    """

    pass


class StageFailure(PipelineError):
    """Raised when a stage's external process fails.

    Covers both a non-zero exit status and a launch failure (for example
    the compiler executable is not on PATH). The stage's own diagnostics
    have already been written to the terminal by the external process.

    Attributes:
        stage: The stage that failed.
        returncode: Exit status of the process, or None if it never started.

    Example:
        >>> raise StageFailure(Stage.COMPILE, returncode=1)
        # User sees: "Stage 'compile' failed (exit status 1)"
    """

    def __init__(
        self,
        stage: Stage,
        *,
        returncode: int | None = None,
        internal_details: str | None = None,
    ) -> None:
        if returncode is None:
            user_message = f"Stage '{stage.value}' failed: command could not be launched"
        else:
            user_message = f"Stage '{stage.value}' failed (exit status {returncode})"

        super().__init__(user_message, internal_details=internal_details)

        self.stage = stage
        self.returncode = returncode


class FilesystemError(PipelineError):
    """Raised when a superseded intermediate artifact cannot be handled.

    Attributes:
        path: The artifact path involved.
        operation: Operation that failed (e.g. "remove").
    """

    def __init__(
        self,
        path: Path,
        operation: str = "remove",
        *,
        internal_details: str | None = None,
    ) -> None:
        super().__init__(
            f"Cannot {operation} intermediate artifact {path}",
            internal_details=internal_details,
        )
        self.path = path
        self.operation = operation
