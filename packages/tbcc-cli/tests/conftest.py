"""Shared test fixtures for tbcc-cli tests.

Provides CliRunner fixtures and a fake invoker patched in place of the
subprocess invoker, so CLI tests never launch gcc.
"""

from __future__ import annotations

from collections.abc import Callable, Generator
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tbcc_core.stages import Stage

SOURCE_FILENAME = "hello.c"


class RecordingInvoker:
    """Invoker that records calls and writes placeholder artifacts."""

    def __init__(self, fail_at: Stage | None = None, returncode: int = 1) -> None:
        self.calls: list[tuple[Stage, Path, Path]] = []
        self.fail_at = fail_at
        self.returncode = returncode
        self.config = None

    @property
    def stages(self) -> list[Stage]:
        return [stage for stage, _, _ in self.calls]

    def invoke(self, stage: Stage, input_path: Path, output_path: Path) -> int:
        self.calls.append((stage, input_path, output_path))
        if stage == self.fail_at:
            return self.returncode
        output_path.write_text(f"{stage.value}\n")
        return 0


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Click test runner."""
    return CliRunner()


@pytest.fixture
def isolated_runner(cli_runner: CliRunner) -> Generator[CliRunner, None, None]:
    """Create a Click test runner with an isolated filesystem.

    Yields:
        CliRunner instance with isolated filesystem.
    """
    with cli_runner.isolated_filesystem():
        yield cli_runner


@pytest.fixture
def source_file(isolated_runner: CliRunner) -> Path:
    """Create hello.c in the isolated filesystem."""
    path = Path(SOURCE_FILENAME)
    path.write_text("int main(void) {\n    return 2;\n}\n")
    return path


@pytest.fixture
def patch_invoker() -> Generator[Callable[..., RecordingInvoker], None, None]:
    """Patch the CLI's SubprocessInvoker with a RecordingInvoker.

    Yields:
        Function that installs a RecordingInvoker with the given options
        and returns it. The config passed by the CLI is stored on it.
    """
    with patch("tbcc_cli.main.SubprocessInvoker") as mock_cls:

        def _install(**kwargs: object) -> RecordingInvoker:
            invoker = RecordingInvoker(**kwargs)  # type: ignore[arg-type]

            def _factory(config: object = None) -> RecordingInvoker:
                invoker.config = config  # type: ignore[assignment]
                return invoker

            mock_cls.side_effect = _factory
            return invoker

        yield _install
