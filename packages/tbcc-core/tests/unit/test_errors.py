"""Unit tests for the tbcc-core exception hierarchy."""

from __future__ import annotations

from pathlib import Path

from structlog.testing import capture_logs

from tbcc_core.errors import (
    ConfigurationError,
    FilesystemError,
    PipelineError,
    StageFailure,
    TbccError,
)
from tbcc_core.stages import Stage


class TestTbccError:
    """Tests for the base exception."""

    def test_user_message(self) -> None:
        err = TbccError("Build failed")
        assert err.user_message == "Build failed"
        assert str(err) == "Build failed"

    def test_internal_details_logged_not_shown(self) -> None:
        """Internal details go to the log, never into the message."""
        with capture_logs() as logs:
            err = TbccError("Build failed", internal_details="secret detail")

        assert "secret detail" not in str(err)
        assert logs[0]["internal_details"] == "secret detail"
        assert logs[0]["error_type"] == "TbccError"


class TestConfigurationError:
    def test_file_path_in_message(self) -> None:
        err = ConfigurationError("Invalid toolchain", file_path="tbcc.yaml")
        assert str(err) == "Invalid toolchain (in tbcc.yaml)"
        assert err.file_path == "tbcc.yaml"

    def test_is_not_pipeline_error(self) -> None:
        """Configuration problems are raised before the pipeline runs."""
        assert not isinstance(ConfigurationError("x"), PipelineError)


class TestStageFailure:
    def test_exit_status_message(self) -> None:
        err = StageFailure(Stage.COMPILE, returncode=1)
        assert err.stage == Stage.COMPILE
        assert err.returncode == 1
        assert "compile" in str(err)
        assert "exit status 1" in str(err)

    def test_launch_failure_message(self) -> None:
        err = StageFailure(Stage.PREPROCESS)
        assert err.returncode is None
        assert "could not be launched" in str(err)

    def test_hierarchy(self) -> None:
        err = StageFailure(Stage.ASSEMBLE_LINK, returncode=1)
        assert isinstance(err, PipelineError)
        assert isinstance(err, TbccError)


class TestFilesystemError:
    def test_message(self) -> None:
        err = FilesystemError(Path("hello.i"))
        assert err.path == Path("hello.i")
        assert err.operation == "remove"
        assert "Cannot remove intermediate artifact hello.i" in str(err)
        assert isinstance(err, PipelineError)
