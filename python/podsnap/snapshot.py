# SPDX-License-Identifier: BSD-2-Clause
# Copyright (c) deftio llc

"""Build immutable container snapshots from runtime state bundles."""

from __future__ import annotations

import datetime
from typing import TYPE_CHECKING, Callable

from podsnap.types import (
    ContainerMount,
    ContainerSnapshot,
    ContainerState,
    PodContainerInfo,
    PortMapping,
)

if TYPE_CHECKING:
    from podsnap.collaborators import NamespaceLookup
    from podsnap.types import SourceMount, SourcePortMapping, StateBundle

Clock = Callable[[], datetime.datetime]


def _utcnow() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


def build_port_mapping(pm: SourcePortMapping) -> PortMapping:
    """Convert a config port mapping to its wire form (decimal-string ports)."""
    return PortMapping(
        host_port=str(int(pm.host_port)),
        host_ip=pm.host_ip,
        protocol=pm.protocol,
        container_port=str(int(pm.container_port)),
    )


def build_mount(mount: SourceMount) -> ContainerMount:
    return ContainerMount(
        destination=mount.destination,
        type=mount.type,
        source=mount.source,
        options=tuple(mount.options),
    )


def build_pod_container_info(container_id: str, bundle: StateBundle) -> PodContainerInfo:
    """Project a state bundle down to the ``(id, status, name)`` a pod listing carries."""
    return PodContainerInfo(
        id=container_id,
        status=str(bundle.state),
        name=bundle.config.name,
    )


class ContainerSnapshotBuilder:
    """Turns state bundles into :class:`ContainerSnapshot` records.

    The builder keeps no state between calls; it only holds its
    collaborators.  ``clock`` exists so uptime can be pinned in tests.
    """

    def __init__(self, namespace_lookup: NamespaceLookup, *, clock: Clock | None = None) -> None:
        self._namespace_lookup = namespace_lookup
        self._clock = clock or _utcnow

    def build(self, container_id: str, bundle: StateBundle) -> ContainerSnapshot:
        """Build a snapshot of *container_id* from *bundle*.

        Sizes are copied only when the bundle carries them; otherwise both
        are ``0`` and ``size_reported`` is false.
        """
        config = bundle.config
        created = config.created_time
        if created.tzinfo is None:
            created = created.replace(tzinfo=datetime.timezone.utc)

        size = bundle.size
        return ContainerSnapshot(
            id=container_id,
            names=config.name,
            image=config.rootfs_image_name,
            image_id=config.rootfs_image_id,
            command=tuple(config.args),
            created_at=created,
            running_for=self._clock() - created,
            status=bundle.state,
            ports=tuple(build_port_mapping(pm) for pm in config.port_mappings),
            labels=dict(config.labels),
            mounts=tuple(build_mount(m) for m in config.mounts),
            running=bundle.state is ContainerState.RUNNING,
            namespaces=self._namespace_lookup(bundle.pid),
            rootfs_size=size.rootfs_size if size is not None else 0,
            rw_size=size.rw_size if size is not None else 0,
            size_reported=size is not None,
        )
