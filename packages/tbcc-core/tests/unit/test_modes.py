"""Unit tests for pipeline mode selection."""

from __future__ import annotations

import pytest

from tbcc_core.errors import ConfigurationError
from tbcc_core.modes import PipelineMode, resolve_mode
from tbcc_core.stages import Stage


class TestResolveMode:
    """Tests for resolve_mode."""

    def test_no_flags_is_full(self) -> None:
        """Absence of every flag means a full build."""
        assert resolve_mode() == PipelineMode.FULL

    @pytest.mark.parametrize(
        ("flag", "expected"),
        [
            ("lex", PipelineMode.LEX),
            ("parse", PipelineMode.PARSE),
            ("codegen", PipelineMode.CODEGEN),
            ("create_assembly", PipelineMode.ASSEMBLY),
        ],
    )
    def test_single_flag(self, flag: str, expected: PipelineMode) -> None:
        """A single flag selects its mode."""
        assert resolve_mode(**{flag: True}) == expected

    def test_two_flags_rejected(self) -> None:
        """Two flags raise ConfigurationError naming both."""
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_mode(lex=True, codegen=True)

        message = str(exc_info.value)
        assert "mutually exclusive" in message
        assert "--lex" in message
        assert "--codegen" in message

    def test_all_flags_rejected(self) -> None:
        """Every flag at once is rejected."""
        with pytest.raises(ConfigurationError):
            resolve_mode(lex=True, parse=True, codegen=True, create_assembly=True)


class TestStopStage:
    """Tests for the mode to stop-stage mapping."""

    @pytest.mark.parametrize(
        ("mode", "stage"),
        [
            (PipelineMode.LEX, Stage.PREPROCESS),
            (PipelineMode.PARSE, Stage.PREPROCESS),
            (PipelineMode.CODEGEN, Stage.COMPILE),
            (PipelineMode.ASSEMBLY, Stage.COMPILE),
            (PipelineMode.FULL, Stage.ASSEMBLE_LINK),
        ],
    )
    def test_stop_stage(self, mode: PipelineMode, stage: Stage) -> None:
        assert mode.stop_stage == stage
