"""Pipeline mode selection.

A mode decides how far the pipeline runs. The command line exposes one
flag per early-exit mode; at most one may be given, and none means a
full build.
"""

from __future__ import annotations

from enum import Enum

from tbcc_core.errors import ConfigurationError
from tbcc_core.stages import Stage


class PipelineMode(str, Enum):
    """How far the pipeline should run before stopping.

    Attributes:
        LEX: Stop after tokenization (realized by the preprocess stage)
        PARSE: Stop after parsing (realized by the preprocess stage)
        CODEGEN: Stop after code generation, before linking
        ASSEMBLY: Stop after emitting assembly text
        FULL: Produce the final executable
    """

    LEX = "lex"
    PARSE = "parse"
    CODEGEN = "codegen"
    ASSEMBLY = "assembly"
    FULL = "full"

    @property
    def stop_stage(self) -> Stage:
        """Last stage that runs in this mode."""
        return _STOP_STAGES[self]


_STOP_STAGES: dict[PipelineMode, Stage] = {
    PipelineMode.LEX: Stage.PREPROCESS,
    PipelineMode.PARSE: Stage.PREPROCESS,
    PipelineMode.CODEGEN: Stage.COMPILE,
    PipelineMode.ASSEMBLY: Stage.COMPILE,
    PipelineMode.FULL: Stage.ASSEMBLE_LINK,
}

# Flag name shown to users for each early-exit mode
MODE_FLAGS: dict[PipelineMode, str] = {
    PipelineMode.LEX: "--lex",
    PipelineMode.PARSE: "--parse",
    PipelineMode.CODEGEN: "--codegen",
    PipelineMode.ASSEMBLY: "-S",
}


def resolve_mode(
    *,
    lex: bool = False,
    parse: bool = False,
    codegen: bool = False,
    create_assembly: bool = False,
) -> PipelineMode:
    """Resolve mode flags to a single PipelineMode.

    Args:
        lex: Stop after lexing.
        parse: Stop after parsing.
        codegen: Stop after code generation.
        create_assembly: Stop after producing assembly.

    Returns:
        The selected mode, or PipelineMode.FULL if no flag is set.

    Raises:
        ConfigurationError: If more than one flag is set.

    Example:
        >>> resolve_mode(codegen=True)
        <PipelineMode.CODEGEN: 'codegen'>
        >>> resolve_mode()
        <PipelineMode.FULL: 'full'>
    """
    requested = {
        PipelineMode.LEX: lex,
        PipelineMode.PARSE: parse,
        PipelineMode.CODEGEN: codegen,
        PipelineMode.ASSEMBLY: create_assembly,
    }
    selected = [mode for mode, enabled in requested.items() if enabled]

    if len(selected) > 1:
        flags = ", ".join(MODE_FLAGS[mode] for mode in selected)
        raise ConfigurationError(f"Options are mutually exclusive: {flags}")

    return selected[0] if selected else PipelineMode.FULL
