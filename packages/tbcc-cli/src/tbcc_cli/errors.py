"""CLI error handling for tbcc-cli.

This module wraps tbcc-core exceptions into user-friendly
messages with appropriate exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn

import click
from pydantic import ValidationError as PydanticValidationError

from tbcc_cli.output import error
from tbcc_core.errors import (
    ConfigurationError,
    FilesystemError,
    StageFailure,
    TbccError,
)

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


# Exit codes following sysexits.h convention
EXIT_SUCCESS = 0
EXIT_USER_ERROR = 1  # Stage failure (bad source, toolchain error)
EXIT_SYSTEM_ERROR = 2  # System error (permissions, cleanup failure)
EXIT_USAGE_ERROR = 2  # Invalid options or configuration


class CLIError(click.ClickException):
    """CLI-specific exception with exit code support.

    Attributes:
        message: User-facing error message.
        exit_code: Exit code for the CLI (default: 1).
    """

    def __init__(self, message: str, exit_code: int = EXIT_USER_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code

    def show(self, file: object = None) -> None:
        """Display the error message using Rich formatting.

        Args:
            file: Output file (unused, for Click compatibility).
        """
        error(self.format_message())


def format_pydantic_error(err: PydanticValidationError) -> str:
    """Format Pydantic validation error into user-friendly message.

    Args:
        err: Pydantic ValidationError instance.

    Returns:
        Formatted error message with field paths and issues.

    Example:
        >>> format_pydantic_error(err)
        "Validation failed:\\n  - compiler: String should have at least 1 character"
    """
    errors: list[ErrorDetails] = err.errors()
    lines = ["Validation failed:"]

    for e in errors:
        loc = ".".join(str(x) for x in e["loc"])
        msg = e["msg"]
        lines.append(f"  - {loc}: {msg}")

    return "\n".join(lines)


def handle_yaml_error(err: Exception, file_path: str) -> NoReturn:
    """Handle YAML parsing errors with line number information.

    Args:
        err: YAML parsing exception.
        file_path: Path to the file being parsed.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    error_msg = str(err)
    if hasattr(err, "problem_mark") and err.problem_mark is not None:
        mark = err.problem_mark
        line = mark.line + 1
        col = mark.column + 1
        error_msg = f"YAML syntax error at line {line}, column {col}: {err.problem}"  # type: ignore[attr-defined]

    raise CLIError(f"Invalid YAML in {file_path}: {error_msg}", exit_code=EXIT_USAGE_ERROR)


def handle_validation_error(err: PydanticValidationError, file_path: str) -> NoReturn:
    """Handle Pydantic validation errors with user-friendly messages.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    formatted = format_pydantic_error(err)
    raise CLIError(
        f"Invalid configuration in {file_path}:\n{formatted}",
        exit_code=EXIT_USAGE_ERROR,
    )


def handle_file_not_found(file_path: str) -> NoReturn:
    """Handle a missing toolchain configuration file.

    Raises:
        CLIError: Always raises with formatted error message.
    """
    raise CLIError(
        f"File not found: {file_path}\n\n"
        "Use --config to point at a toolchain YAML file, or omit it to use gcc defaults.",
        exit_code=EXIT_SYSTEM_ERROR,
    )


def handle_pipeline_error(err: TbccError) -> NoReturn:
    """Translate a tbcc-core exception into a CLIError.

    Args:
        err: Exception raised while resolving or running the pipeline.

    Raises:
        CLIError: Always raises with the user message and matching exit code.
    """
    if isinstance(err, ConfigurationError):
        raise CLIError(err.user_message, exit_code=EXIT_USAGE_ERROR) from err
    if isinstance(err, FilesystemError):
        raise CLIError(err.user_message, exit_code=EXIT_SYSTEM_ERROR) from err
    if isinstance(err, StageFailure):
        raise CLIError(err.user_message, exit_code=EXIT_USER_ERROR) from err
    raise CLIError(err.user_message) from err
