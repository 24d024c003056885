# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Pod snapshots: status aggregation and per-member composition.

Member containers are queried one at a time after enumeration.  Nothing
locks the pod in between, so a member may change state (or disappear)
between ``all_containers()`` and its own query; the snapshot reports what
each query returned.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from podsnap.snapshot import build_pod_container_info
from podsnap.types import ContainerState, PodSnapshot

if TYPE_CHECKING:
    from collections.abc import Iterable

    from podsnap._logger import CallLogger
    from podsnap.collaborators import PodHandle, StateQuery
    from podsnap.types import PodContainerInfo, PsOptions

POD_STATE_CREATED = "Created"
POD_STATE_ERRORED = "Error"
POD_STATE_EXITED = "Exited"
POD_STATE_PAUSED = "Paused"
POD_STATE_RUNNING = "Running"
POD_STATE_STOPPED = "Stopped"

_POD_BUCKET: dict[ContainerState, str] = {
    ContainerState.EXITED: POD_STATE_STOPPED,
    ContainerState.STOPPED: POD_STATE_STOPPED,
    ContainerState.RUNNING: POD_STATE_RUNNING,
    ContainerState.PAUSED: POD_STATE_PAUSED,
    ContainerState.CREATED: POD_STATE_CREATED,
    ContainerState.CONFIGURED: POD_STATE_CREATED,
}


def aggregate_pod_status(states: Iterable[ContainerState]) -> str:
    """Derive a pod status string from its members' container states."""
    counts: dict[str, int] = {}
    total = 0
    for state in states:
        bucket = _POD_BUCKET.get(state, POD_STATE_ERRORED)
        counts[bucket] = counts.get(bucket, 0) + 1
        total += 1

    if total == 0:
        return POD_STATE_CREATED
    if counts.get(POD_STATE_RUNNING, 0) > 0:
        return POD_STATE_RUNNING
    if counts.get(POD_STATE_PAUSED, 0) == total:
        return POD_STATE_PAUSED
    if counts.get(POD_STATE_STOPPED, 0) == total:
        return POD_STATE_EXITED
    if counts.get(POD_STATE_STOPPED, 0) > 0:
        return POD_STATE_STOPPED
    if counts.get(POD_STATE_ERRORED, 0) > 0:
        return POD_STATE_ERRORED
    return POD_STATE_CREATED


def _compose(pod: PodHandle, status: str, infos: list[PodContainerInfo]) -> PodSnapshot:
    return PodSnapshot(
        id=pod.id,
        name=pod.name,
        created_at=pod.created_time,
        status=status,
        cgroup=pod.cgroup_parent,
        number_of_containers=str(len(infos)),
        containers_info=tuple(infos),
    )


class PodSnapshotBuilder:
    """Composes :class:`PodSnapshot` records from live pod handles."""

    def __init__(self, state_query: StateQuery, *, logger: CallLogger | None = None) -> None:
        self._state_query = state_query
        self._logger = logger

    def build(self, pod: PodHandle, options: PsOptions) -> PodSnapshot:
        """Snapshot *pod*, aborting on the first member that cannot be read.

        Errors from the status query, the member enumeration or any member's
        state query propagate unchanged; no partial snapshot is returned.

        Raises:
            Exception: Whatever the failing collaborator raised.

        """
        status = pod.status()
        infos: list[PodContainerInfo] = []
        for ctr in pod.all_containers():
            try:
                bundle = self._state_query(ctr, options)
            except Exception as exc:
                if self._logger is not None:
                    self._logger.log_abort(pod.id, ctr.id, exc)
                raise
            infos.append(build_pod_container_info(ctr.id, bundle))

        snapshot = _compose(pod, status, infos)
        if self._logger is not None:
            self._logger.log_snapshot("pod", [pod.id])
        return snapshot

    def build_partial(
        self, pod: PodHandle, options: PsOptions
    ) -> tuple[PodSnapshot, tuple[tuple[str, Exception], ...]]:
        """Snapshot *pod*, collecting member failures instead of aborting.

        Pod-level failures (status, enumeration) still propagate.  The
        snapshot lists only the members that could be read and counts
        exactly those; the failures come back in enumeration order, ready
        for :meth:`podsnap.replies.ReplyDispatcher.dispatch`.
        """
        status = pod.status()
        infos: list[PodContainerInfo] = []
        failures: list[tuple[str, Exception]] = []
        for ctr in pod.all_containers():
            try:
                bundle = self._state_query(ctr, options)
            except Exception as exc:  # noqa: BLE001
                failures.append((ctr.id, exc))
                continue
            infos.append(build_pod_container_info(ctr.id, bundle))

        snapshot = _compose(pod, status, infos)
        if self._logger is not None:
            self._logger.log_snapshot("pod", [pod.id])
        return snapshot, tuple(failures)
