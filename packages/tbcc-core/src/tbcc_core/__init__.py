"""tbcc-core: Staged build pipeline for tbcc.

This package provides:
- PipelineController: Run preprocess, compile and assemble/link in order
- PipelineMode / resolve_mode: Early-exit mode selection
- ToolchainConfig: External compiler driver configuration
- Artifact naming helpers and the exception hierarchy
"""

from __future__ import annotations

__version__ = "0.1.0"

from tbcc_core.config import ToolchainConfig
from tbcc_core.errors import (
    ConfigurationError,
    FilesystemError,
    PipelineError,
    StageFailure,
    TbccError,
)
from tbcc_core.models import PipelineResult, StageResult, StageStatus
from tbcc_core.modes import PipelineMode, resolve_mode
from tbcc_core.naming import artifact_path, strip_extension
from tbcc_core.pipeline import PipelineController, run_pipeline
from tbcc_core.runner import Invoker, StageRunner, SubprocessInvoker
from tbcc_core.stages import STAGE_ORDER, Stage, StageSpec

__all__ = [
    "__version__",
    # Pipeline
    "PipelineController",
    "run_pipeline",
    "StageRunner",
    "Invoker",
    "SubprocessInvoker",
    # Stages and modes
    "Stage",
    "StageSpec",
    "STAGE_ORDER",
    "PipelineMode",
    "resolve_mode",
    # Naming
    "artifact_path",
    "strip_extension",
    # Config and results
    "ToolchainConfig",
    "PipelineResult",
    "StageResult",
    "StageStatus",
    # Errors
    "TbccError",
    "ConfigurationError",
    "PipelineError",
    "StageFailure",
    "FilesystemError",
]
