"""Toolchain configuration model.

Describes the external compiler driver and the flags used for each
pipeline stage. Defaults match a stock gcc installation.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field

from tbcc_core.stages import Stage


class ToolchainConfig(BaseModel):
    """Configuration for the external toolchain.

    Attributes:
        compiler: Compiler driver executable (name on PATH or absolute path)
        preprocess_flags: Flags selecting preprocess-only output
        compile_flags: Flags selecting compile-to-assembly output
        link_flags: Extra flags for the assemble/link stage

    Example:
        >>> config = ToolchainConfig(compiler="clang")
        >>> config.command_for(Stage.COMPILE, Path("a.i"), Path("a.s"))
        ['clang', '-S', 'a.i', '-o', 'a.s']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    compiler: str = Field(default="gcc", min_length=1, description="Compiler driver")
    preprocess_flags: list[str] = Field(
        default_factory=lambda: ["-E", "-P"],
        description="Preprocess stage flags",
    )
    compile_flags: list[str] = Field(
        default_factory=lambda: ["-S"],
        description="Compile stage flags",
    )
    link_flags: list[str] = Field(
        default_factory=list,
        description="Assemble/link stage flags",
    )

    def flags_for(self, stage: Stage) -> list[str]:
        """Return the configured flags for a stage."""
        if stage is Stage.PREPROCESS:
            return list(self.preprocess_flags)
        if stage is Stage.COMPILE:
            return list(self.compile_flags)
        return list(self.link_flags)

    def command_for(self, stage: Stage, input_path: Path, output_path: Path) -> list[str]:
        """Build the argument vector for one stage invocation.

        Args:
            stage: Stage being run.
            input_path: File the stage reads.
            output_path: File the stage must write.

        Returns:
            Command as a list suitable for subprocess.
        """
        return [
            self.compiler,
            *self.flags_for(stage),
            str(input_path),
            "-o",
            str(output_path),
        ]

    @classmethod
    def from_yaml(cls, path: str | Path) -> ToolchainConfig:
        """Load and validate ToolchainConfig from a YAML file.

        An empty file yields the defaults.

        Args:
            path: Path to the YAML file.

        Returns:
            Validated ToolchainConfig instance.

        Raises:
            FileNotFoundError: If file doesn't exist.
            yaml.YAMLError: If YAML syntax is invalid.
            pydantic.ValidationError: If schema validation fails.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        with path.open("r") as f:
            data: dict[str, Any] | None = yaml.safe_load(f)

        return cls.model_validate(data or {})
