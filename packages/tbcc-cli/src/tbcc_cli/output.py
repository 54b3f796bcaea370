"""Rich console output utilities for tbcc-cli.

This module provides formatted console output with Rich,
supporting colored success/error messages and
respecting NO_COLOR environment variable.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape

if TYPE_CHECKING:
    from tbcc_core.models import PipelineResult

# Rich automatically respects NO_COLOR, but we also support --no-color flag
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.
        stderr: If True, write to stderr instead of stdout.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(
        force_terminal=force_terminal,
        no_color=no_color or _force_no_color,
        stderr=stderr,
    )


# Default console instances
console = create_console()
err_console = create_console(stderr=True)


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Compiled to hello")
        ✓ Compiled to hello
    """
    console.print(f"[green]✓[/green] {escape(message)}", highlight=False, soft_wrap=True, **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X to stderr.

    Example:
        >>> error("Stage 'compile' failed (exit status 1)")
        ✗ Stage 'compile' failed (exit status 1)
    """
    err_console.print(f"[red]✗[/red] {escape(message)}", highlight=False, soft_wrap=True, **kwargs)


def info(message: str, **kwargs: Any) -> None:
    """Print an informational message."""
    console.print(escape(message), highlight=False, soft_wrap=True, **kwargs)


def print_stage_report(result: PipelineResult) -> None:
    """Print one line per stage with status and duration.

    Args:
        result: Completed pipeline result.

    Example:
        >>> print_stage_report(result)
          preprocess: produced (12ms)
          compile: produced (40ms)
    """
    for stage_result in result.stages:
        info(
            f"  {stage_result.stage.value}: {stage_result.status.value} "
            f"({stage_result.duration_ms}ms)"
        )
    for path in result.removed:
        info(f"  removed {path}")


def set_no_color(no_color: bool) -> None:
    """Update the global consoles to enable/disable colors.

    Note:
        This updates the module-level console instances.
    """
    global console, err_console
    console = create_console(no_color=no_color)
    err_console = create_console(no_color=no_color, stderr=True)
