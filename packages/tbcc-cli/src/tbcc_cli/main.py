"""CLI entry point for tbcc.

Parses the command line, resolves the pipeline mode and toolchain
configuration, and hands the input file to the build pipeline.
"""

from __future__ import annotations

from pathlib import Path

import click
import rich_click as rclick
import yaml
from pydantic import ValidationError as PydanticValidationError

from tbcc_cli import __version__
from tbcc_cli.errors import (
    handle_file_not_found,
    handle_pipeline_error,
    handle_validation_error,
    handle_yaml_error,
)
from tbcc_cli.output import print_stage_report, set_no_color, success
from tbcc_core.config import ToolchainConfig
from tbcc_core.errors import TbccError
from tbcc_core.modes import resolve_mode
from tbcc_core.observability import configure_logging
from tbcc_core.pipeline import PipelineController
from tbcc_core.runner import SubprocessInvoker

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _load_config(config_path: str | None, compiler: str | None) -> ToolchainConfig:
    """Build the toolchain configuration from --config and --cc.

    Args:
        config_path: Optional YAML file with toolchain settings.
        compiler: Optional compiler override.

    Returns:
        Validated ToolchainConfig.

    Raises:
        CLIError: If the file is missing or invalid.
    """
    if config_path is None:
        config = ToolchainConfig()
    else:
        try:
            config = ToolchainConfig.from_yaml(config_path)
        except FileNotFoundError:
            handle_file_not_found(config_path)
        except yaml.YAMLError as e:
            handle_yaml_error(e, config_path)
        except PydanticValidationError as e:
            handle_validation_error(e, config_path)

    if compiler:
        config = config.model_copy(update={"compiler": compiler})
    return config


@click.command(cls=rclick.RichCommand)
@click.version_option(version=__version__, prog_name="tbcc")
@click.argument("input_file", type=click.Path(dir_okay=False))
@click.option("--lex", is_flag=True, default=False, help="Run Lexer on the input file and exit")
@click.option("--parse", is_flag=True, default=False, help="Parse the input file and exit")
@click.option(
    "--codegen",
    is_flag=True,
    default=False,
    help="Lex, parse and assemble the input file and exit before code emission",
)
@click.option(
    "-S",
    "create_assembly",
    is_flag=True,
    default=False,
    help="Compile the input file and exit",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Toolchain YAML file [default: gcc settings]",
)
@click.option(
    "--cc",
    "compiler",
    envvar="TBCC_CC",
    default=None,
    help="Compiler driver executable (env: TBCC_CC)",
)
@click.option("-v", "--verbose", is_flag=True, default=False, help="Verbose output")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
def cli(
    input_file: str,
    lex: bool,
    parse: bool,
    codegen: bool,
    create_assembly: bool,
    config_path: str | None,
    compiler: str | None,
    verbose: bool,
) -> None:
    """TBCC - Thomas Bollmeier's C Compiler.

    Preprocesses, compiles and links INPUT_FILE into an executable next
    to it. At most one of `--lex`, `--parse`, `--codegen` and `-S` may be
    given to stop early.

    Examples:

        tbcc hello.c

        tbcc --codegen hello.c

        tbcc --cc clang -S hello.c
    """
    configure_logging(log_level="DEBUG" if verbose else "CRITICAL")

    try:
        mode = resolve_mode(
            lex=lex,
            parse=parse,
            codegen=codegen,
            create_assembly=create_assembly,
        )
    except TbccError as e:
        handle_pipeline_error(e)

    config = _load_config(config_path, compiler)

    try:
        result = PipelineController(SubprocessInvoker(config)).run(Path(input_file), mode)
    except TbccError as e:
        handle_pipeline_error(e)

    success(result.summary())
    if verbose:
        print_stage_report(result)


if __name__ == "__main__":
    cli()
