"""Shared pytest fixtures for tbcc-core tests.

Provides structlog configuration and a fake stage invoker that records
calls and writes placeholder artifacts instead of launching gcc.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest
import structlog

from tbcc_core.stages import Stage


@pytest.fixture(autouse=True)
def configure_structlog_for_tests() -> None:
    """Configure structlog to output to stdout for test capture."""
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=False,  # Important for test isolation
    )


class FakeInvoker:
    """Invoker that records calls and simulates stage outcomes.

    Attributes:
        calls: (stage, input_path, output_path) for every invocation.
        fail_at: Stage that exits with ``returncode`` instead of succeeding.
        launch_error_at: Stage that raises FileNotFoundError on launch.
    """

    def __init__(
        self,
        fail_at: Stage | None = None,
        returncode: int = 1,
        launch_error_at: Stage | None = None,
    ) -> None:
        self.calls: list[tuple[Stage, Path, Path]] = []
        self.fail_at = fail_at
        self.returncode = returncode
        self.launch_error_at = launch_error_at

    @property
    def stages(self) -> list[Stage]:
        return [stage for stage, _, _ in self.calls]

    def invoke(self, stage: Stage, input_path: Path, output_path: Path) -> int:
        self.calls.append((stage, input_path, output_path))
        if stage == self.launch_error_at:
            raise FileNotFoundError(2, "No such file or directory", "gcc")
        if stage == self.fail_at:
            return self.returncode
        output_path.write_text(f"{stage.value} <- {input_path.name}\n")
        return 0


@pytest.fixture
def fake_invoker() -> FakeInvoker:
    """Return a FakeInvoker where every stage succeeds."""
    return FakeInvoker()


@pytest.fixture
def make_invoker() -> type[FakeInvoker]:
    """Return the FakeInvoker class for tests that need failures."""
    return FakeInvoker


@pytest.fixture
def source_file(tmp_path: Path) -> Path:
    """Write a minimal C program to tmp_path and return its path."""
    path = tmp_path / "hello.c"
    path.write_text("int main(void) {\n    return 2;\n}\n")
    return path
