# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI entry point for podsnap."""

from __future__ import annotations

import dataclasses
from pathlib import Path

import click

from podsnap import __version__
from podsnap._config import PodSnapConfig, load_config
from podsnap._logger import CallLogger


@dataclasses.dataclass
class CliContext:
    """Shared state passed through Click's context object."""

    config: PodSnapConfig = dataclasses.field(default_factory=PodSnapConfig)
    logger: CallLogger = dataclasses.field(default_factory=lambda: CallLogger(None))
    verbose: bool = False


@click.group()
@click.option(
    "--project",
    "project_root",
    envvar="PODSNAP_PROJECT",
    default=None,
    type=click.Path(file_okay=False, path_type=Path),
    help="Project directory holding .podsnap/podsnap.yaml.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.version_option(version=__version__, prog_name="podsnap")
@click.pass_context
def cli(ctx: click.Context, project_root: Path | None, *, verbose: bool) -> None:
    """Snapshot container and pod state from a runtime dump."""
    config = load_config(project_root)
    ctx.obj = CliContext(
        config=config,
        logger=CallLogger(config.history_dir, enabled=config.auto_log),
        verbose=verbose,
    )


# --- Register commands ---

from podsnap.cli._commands import pods_cmd, ps_cmd, reply_cmd  # noqa: E402

cli.add_command(ps_cmd)
cli.add_command(pods_cmd)
cli.add_command(reply_cmd)
