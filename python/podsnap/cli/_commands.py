# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""CLI command implementations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from podsnap.cli._output import (
    format_container_list,
    format_error,
    format_pod_list,
    format_reply,
    print_info,
)
from podsnap.coercion import coerce_list_options
from podsnap.dump import RuntimeDump, load_dump
from podsnap.errors import PodSnapError
from podsnap.pods import PodSnapshotBuilder
from podsnap.replies import ErrorOccurred, ReplyDispatcher
from podsnap.snapshot import ContainerSnapshotBuilder
from podsnap.types import WirePsOpts

if TYPE_CHECKING:
    from podsnap.cli.main import CliContext
    from podsnap.replies import ReplyOutcome
    from podsnap.types import PodSnapshot

_DUMP_ARG = click.argument("dump", type=click.Path(dir_okay=False, path_type=Path))
_JSON_OPT = click.option("--json", "json_output", is_flag=True, help="Output wire-form JSON.")


def _get_ctx(ctx: click.Context) -> CliContext:
    """Extract the CliContext from Click's context object."""
    return ctx.obj  # type: ignore[no-any-return]


def _load(path: Path, cli_ctx: CliContext) -> RuntimeDump:
    """Load a dump or exit with a formatted error."""
    try:
        runtime = load_dump(path)
    except PodSnapError as exc:
        format_error(exc)
        raise SystemExit(1) from exc
    if cli_ctx.verbose:
        print_info(
            f"Loaded {len(runtime.bundles)} containers and {len(runtime.pods())} pods from {path}"
        )
    return runtime


@click.command("ps")
@_DUMP_ARG
@click.option("--all", "-a", "all_", is_flag=True, help="Include containers that are not running.")
@click.option("--last", "-n", type=int, default=None, help="Show the N newest containers.")
@click.option("--latest", "-l", is_flag=True, help="Show only the newest container.")
@click.option("--no-trunc", is_flag=True, help="Do not truncate container IDs.")
@click.option("--sort", default=None, help="Sort by created, id, image, names or status.")
@_JSON_OPT
@click.pass_context
def ps_cmd(  # noqa: PLR0913
    ctx: click.Context,
    dump: Path,
    last: int | None,
    sort: str | None,
    *,
    all_: bool,
    latest: bool,
    no_trunc: bool,
    json_output: bool,
) -> None:
    """List container snapshots from DUMP."""
    cli_ctx = _get_ctx(ctx)
    runtime = _load(dump, cli_ctx)
    options = coerce_list_options(
        WirePsOpts(
            all=all_,
            last=last,
            latest=latest,
            no_trunc=no_trunc,
            sort=sort or cli_ctx.config.default_sort,
        )
    )
    builder = ContainerSnapshotBuilder(runtime.namespace_lookup)
    try:
        snapshots = [
            builder.build(c.id, runtime.query_state(c, options))
            for c in runtime.list_containers(options)
        ]
    except PodSnapError as exc:
        format_error(exc)
        raise SystemExit(1) from exc

    cli_ctx.logger.log_snapshot("container", [s.id for s in snapshots])
    format_container_list(
        snapshots,
        json_output=json_output or cli_ctx.config.json_output,
        no_trunc=options.no_trunc,
    )


@click.command("pods")
@_DUMP_ARG
@click.option("--partial", is_flag=True, help="List readable members instead of aborting.")
@_JSON_OPT
@click.pass_context
def pods_cmd(ctx: click.Context, dump: Path, *, partial: bool, json_output: bool) -> None:
    """List pod snapshots from DUMP."""
    cli_ctx = _get_ctx(ctx)
    runtime = _load(dump, cli_ctx)
    options = coerce_list_options(WirePsOpts(all=True))
    builder = PodSnapshotBuilder(runtime.query_state, logger=cli_ctx.logger)
    dispatcher = ReplyDispatcher(logger=cli_ctx.logger)

    snapshots: list[PodSnapshot] = []
    replies: list[ReplyOutcome] = []
    for pod in runtime.pods():
        try:
            if partial:
                snapshot, failures = builder.build_partial(pod, options)
                snapshots.append(snapshot)
                if failures:
                    outcome = dispatcher.dispatch(pod.id, failures, None)
                    if outcome is not None:
                        replies.append(outcome)
            else:
                snapshots.append(builder.build(pod, options))
        except PodSnapError as exc:
            outcome = dispatcher.dispatch(pod.id, None, exc)
            if outcome is not None:
                format_reply(outcome)
            raise SystemExit(1) from exc

    format_pod_list(snapshots, json_output=json_output or cli_ctx.config.json_output)
    for outcome in replies:
        format_reply(outcome)


@click.command("reply")
@_DUMP_ARG
@click.argument("pod")
@click.option("--fail-fast", is_flag=True, help="Abort on the first unreadable member.")
@_JSON_OPT
@click.pass_context
def reply_cmd(
    ctx: click.Context, dump: Path, pod: str, *, fail_fast: bool, json_output: bool
) -> None:
    """Show the reply a pod listing of POD in DUMP would send."""
    cli_ctx = _get_ctx(ctx)
    runtime = _load(dump, cli_ctx)
    json_output = json_output or cli_ctx.config.json_output
    options = coerce_list_options(WirePsOpts(all=True))
    builder = PodSnapshotBuilder(runtime.query_state, logger=cli_ctx.logger)
    dispatcher = ReplyDispatcher(logger=cli_ctx.logger)

    snapshot: PodSnapshot | None = None
    failures: tuple[tuple[str, Exception], ...] | None = None
    error: PodSnapError | None = None
    pod_id = pod
    try:
        handle = runtime.pod(pod)
        pod_id = handle.id
        if fail_fast:
            snapshot = builder.build(handle, options)
        else:
            snapshot, found = builder.build_partial(handle, options)
            failures = found or None
    except PodSnapError as exc:
        error = exc

    outcome = dispatcher.dispatch(pod_id, failures, error)
    if outcome is None:
        if snapshot is not None:
            format_pod_list([snapshot], json_output=json_output)
        return

    format_reply(outcome, json_output=json_output)
    if isinstance(outcome, ErrorOccurred):
        raise SystemExit(1)
