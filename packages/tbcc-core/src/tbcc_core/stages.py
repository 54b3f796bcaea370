"""Pipeline stage definitions.

The build runs three stages in a fixed order. Each stage reads the
previous stage's artifact and writes its own beside it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Stage(str, Enum):
    """A step of the build pipeline.

    Attributes:
        PREPROCESS: Expand macros and includes (``.i`` output)
        COMPILE: Translate preprocessed source to assembly (``.s`` output)
        ASSEMBLE_LINK: Assemble and link into an executable (no extension)
    """

    PREPROCESS = "preprocess"
    COMPILE = "compile"
    ASSEMBLE_LINK = "assemble_link"

    @property
    def spec(self) -> StageSpec:
        """Fixed naming contract for this stage."""
        return STAGE_SPECS[self]


@dataclass(frozen=True)
class StageSpec:
    """Extensions a stage consumes and produces.

    Attributes:
        input_extension: Extension expected on the input, or None for any.
        output_extension: Extension written by the stage ("" for none).
    """

    input_extension: str | None
    output_extension: str


STAGE_SPECS: dict[Stage, StageSpec] = {
    Stage.PREPROCESS: StageSpec(input_extension=None, output_extension="i"),
    Stage.COMPILE: StageSpec(input_extension="i", output_extension="s"),
    Stage.ASSEMBLE_LINK: StageSpec(input_extension="s", output_extension=""),
}

# Execution order
STAGE_ORDER: tuple[Stage, ...] = (Stage.PREPROCESS, Stage.COMPILE, Stage.ASSEMBLE_LINK)
